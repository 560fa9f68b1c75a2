"""
Server-side signature verification for Starlette/FastAPI.
"""

from .middleware import (
    SignatureVerificationMiddleware,
    default_error_handler,
    verify_request,
)
from .signed_auth import SignatureContext, require_signature

__all__ = [
    "SignatureVerificationMiddleware",
    "default_error_handler",
    "verify_request",
    "SignatureContext",
    "require_signature",
]
