"""
Signature Envelope

The two headers that carry a signature from client to server, plus the
encoding helpers for their values.
"""

import base64
import binascii
import re
from datetime import datetime, timezone
from typing import Dict, Optional, Union

from httpsign.core.signing.base import Signer
from httpsign.core.signing.canonical import QueryParams, create_canonical_message
from httpsign.core.signing.errors import VerificationError, VerificationFailure

HEADER_SIGNATURE = "X-Signature"
HEADER_TIMESTAMP = "X-Signature-Timestamp"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_BASE64URL_RAW = re.compile(r"[A-Za-z0-9_-]*")


def current_timestamp() -> str:
    """Current time as an RFC 3339 UTC string, e.g. 2024-01-01T00:00:00Z."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def encode_signature(signature: bytes) -> str:
    """Encode raw signature bytes as base64url without padding."""
    return base64.urlsafe_b64encode(signature).rstrip(b"=").decode("ascii")


def decode_signature(value: str) -> bytes:
    """
    Decode a base64url (no padding) signature header value.

    Raises:
        VerificationError: If the value is not valid unpadded base64url
    """
    if not _BASE64URL_RAW.fullmatch(value) or len(value) % 4 == 1:
        raise VerificationError(
            VerificationFailure.INVALID_SIGNATURE_FORMAT,
            f"Invalid base64url signature: {value[:16]!r}",
        )
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise VerificationError(
            VerificationFailure.INVALID_SIGNATURE_FORMAT,
            f"Invalid base64url signature: {e}",
        ) from e


def signature_headers(
    signer: Signer,
    method: str,
    host: str,
    path: str,
    query: Union[QueryParams, str],
    timestamp: Optional[str] = None,
) -> Dict[str, str]:
    """
    Sign request components and return the headers to attach.

    Args:
        signer: Signing backend
        method: HTTP method
        host: Request host
        path: Escaped request path
        query: Query parameters or canonical query string
        timestamp: Timestamp to sign (default: now)

    Returns:
        Dict with X-Signature-Timestamp and X-Signature
    """
    if timestamp is None:
        timestamp = current_timestamp()
    message = create_canonical_message(method, host, path, query, timestamp)
    signature = signer.sign(message)
    return {
        HEADER_TIMESTAMP: timestamp,
        HEADER_SIGNATURE: encode_signature(signature),
    }
