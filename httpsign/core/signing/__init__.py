"""
HTTP Request Signing Module

Canonical message construction, signature envelope helpers and pluggable
algorithm backends (Ed25519, ECDSA, RSA PKCS#1 v1.5, RSA-PSS, HMAC).
"""

from httpsign.core.signing.base import (
    Signer,
    Verifier,
    SignerVerifier,
    resolve_hash,
)
from httpsign.core.signing.canonical import (
    create_canonical_message,
    encode_query,
    parse_query,
    query_from_items,
)
from httpsign.core.signing.envelope import (
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    current_timestamp,
    decode_signature,
    encode_signature,
    signature_headers,
)
from httpsign.core.signing.errors import (
    SigningError,
    VerificationError,
    VerificationFailure,
    ConfigurationError,
    HashUnavailableError,
    InvalidKeyError,
    SignRequestError,
)
from httpsign.core.signing.ecdsa import ECDSASigner, ECDSAVerifier
from httpsign.core.signing.ed25519 import Ed25519Signer, Ed25519Verifier
from httpsign.core.signing.hmac import HMAC
from httpsign.core.signing.rsa import (
    PKCSSigner,
    PKCSVerifier,
    PSSOptions,
    PSSSigner,
    PSSVerifier,
)

__all__ = [
    # Capability
    "Signer",
    "Verifier",
    "SignerVerifier",
    "resolve_hash",
    # Canonical message
    "create_canonical_message",
    "encode_query",
    "parse_query",
    "query_from_items",
    # Envelope
    "HEADER_SIGNATURE",
    "HEADER_TIMESTAMP",
    "current_timestamp",
    "decode_signature",
    "encode_signature",
    "signature_headers",
    # Errors
    "SigningError",
    "VerificationError",
    "VerificationFailure",
    "ConfigurationError",
    "HashUnavailableError",
    "InvalidKeyError",
    "SignRequestError",
    # Backends
    "ECDSASigner",
    "ECDSAVerifier",
    "Ed25519Signer",
    "Ed25519Verifier",
    "HMAC",
    "PKCSSigner",
    "PKCSVerifier",
    "PSSOptions",
    "PSSSigner",
    "PSSVerifier",
]
