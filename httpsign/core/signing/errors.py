"""
Signing Errors

Exception hierarchy shared by the algorithm backends, the client transport
and the server middleware.

    SigningError
    ├── VerificationError       -> 401 on the server
    ├── ConfigurationError      -> raised while building a backend
    │   ├── HashUnavailableError
    │   └── InvalidKeyError
    └── SignRequestError        -> client could not sign an outgoing request
"""

from enum import Enum
from typing import Optional


class VerificationFailure(Enum):
    """Enumeration of possible verification failures."""
    MISSING_HEADERS = "missing_headers"
    INVALID_SIGNATURE_FORMAT = "invalid_signature_format"
    SIGNATURE_VERIFICATION_FAILED = "signature_verification_failed"


class SigningError(Exception):
    """Base class for all httpsign errors."""


class VerificationError(SigningError):
    """
    A signature could not be verified.

    Attributes:
        reason: Which check failed
    """

    def __init__(
        self,
        reason: VerificationFailure = VerificationFailure.SIGNATURE_VERIFICATION_FAILED,
        message: Optional[str] = None,
    ):
        self.reason = reason
        super().__init__(message or "signature verification error")


class ConfigurationError(SigningError, ValueError):
    """A backend was constructed with unusable parameters."""


class HashUnavailableError(ConfigurationError):
    def __init__(self, name: object = None):
        message = "requested hash function is unavailable"
        if name is not None:
            message = f"{message}: {name!r}"
        super().__init__(message)


class InvalidKeyError(ConfigurationError):
    def __init__(self, message: str = "bad key"):
        super().__init__(message)


class SignRequestError(SigningError):
    """Raised by the client transport when the signer fails."""
