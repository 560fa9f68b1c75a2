"""
Client-side request signing for httpx.
"""

from .transport import (
    AsyncSigningTransport,
    SigningTransport,
    async_signing_client,
    sign_request,
    signing_client,
)

__all__ = [
    "AsyncSigningTransport",
    "SigningTransport",
    "async_signing_client",
    "sign_request",
    "signing_client",
]
