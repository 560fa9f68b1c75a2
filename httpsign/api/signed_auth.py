"""
Signed Request Dependency

Per-route alternative to SignatureVerificationMiddleware for FastAPI apps
that only protect some endpoints.

Example:
    require_signed = require_signature(verifier)

    @app.get("/api/emails")
    async def list_emails(sig: SignatureContext = Depends(require_signed)):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import HTTPException, Request, status

from httpsign.api.middleware import verify_request
from httpsign.core.signing.base import Verifier
from httpsign.core.signing.envelope import HEADER_TIMESTAMP
from httpsign.core.signing.errors import VerificationError

logger = logging.getLogger(__name__)


@dataclass
class SignatureContext:
    """
    Details of a verified request.

    Attributes:
        timestamp: Signed X-Signature-Timestamp value. Not checked for
            freshness; routes that need replay protection can use it.
    """
    timestamp: str


def require_signature(verifier: Verifier) -> Callable[[Request], Awaitable[SignatureContext]]:
    """
    Build a dependency that verifies the request signature.

    Raises (from the dependency):
        HTTPException: 401 on verification failure, 500 on any other error
    """
    async def checker(request: Request) -> SignatureContext:
        try:
            verify_request(request, verifier)
        except VerificationError as e:
            logger.warning(f"Signed request rejected: {e.reason.value} - {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Signature verification failed",
            ) from e
        except Exception as e:
            logger.error(f"Signature verification error: {type(e).__name__}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal Server Error",
            ) from e

        return SignatureContext(timestamp=request.headers[HEADER_TIMESTAMP])

    return checker
