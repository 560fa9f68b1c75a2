"""
Signature Verification Middleware

Verifies the X-Signature / X-Signature-Timestamp headers on every incoming
request before it reaches the application.

Failures are handed to an error handler:
- VerificationError (bad, missing or undecodable signature) -> 401
- anything else (e.g. a backend failure) -> 500

Example:
    app = FastAPI()
    app.add_middleware(SignatureVerificationMiddleware, verifier=Ed25519Verifier(public_key))
"""

import logging
from typing import Callable, Optional
from urllib.parse import quote

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR
from starlette.types import ASGIApp

from httpsign.core.signing.base import Verifier
from httpsign.core.signing.canonical import create_canonical_message, parse_query
from httpsign.core.signing.envelope import HEADER_SIGNATURE, HEADER_TIMESTAMP, decode_signature
from httpsign.core.signing.errors import VerificationError, VerificationFailure

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Request, Exception], Response]


def _escaped_path(request: Request) -> str:
    raw_path = request.scope.get("raw_path")
    if raw_path:
        # Some servers include the query string in raw_path
        return raw_path.split(b"?", 1)[0].decode("latin-1")
    # Characters a client leaves unescaped in a path (RFC 3986 pchar)
    return quote(request.scope.get("path", ""), safe="/:@!$&'()*+,;=~")


def verify_request(request: Request, verifier: Verifier) -> None:
    """
    Verify the signature of an incoming request.

    The canonical message is rebuilt from the parsed raw query string, so
    parameter order does not matter.

    Args:
        request: Incoming Starlette/FastAPI request
        verifier: Verification backend

    Raises:
        VerificationError: If headers are missing, the signature cannot be
            decoded or does not match
        Exception: Any other failure raised by the verifier
    """
    timestamp = request.headers.get(HEADER_TIMESTAMP)
    signature = request.headers.get(HEADER_SIGNATURE)

    if timestamp is None or signature is None:
        missing = []
        if timestamp is None: missing.append(HEADER_TIMESTAMP)
        if signature is None: missing.append(HEADER_SIGNATURE)
        raise VerificationError(
            VerificationFailure.MISSING_HEADERS,
            f"Missing required headers: {', '.join(missing)}",
        )

    message = create_canonical_message(
        method=request.method,
        host=request.headers.get("host") or request.url.netloc,
        path=_escaped_path(request),
        query=parse_query(request.scope.get("query_string", b"")),
        timestamp=timestamp,
    )
    signature_bytes = decode_signature(signature)

    if not verifier.verify(message, signature_bytes):
        raise VerificationError(
            VerificationFailure.SIGNATURE_VERIFICATION_FAILED,
            "Signature verification failed",
        )


def default_error_handler(request: Request, exc: Exception) -> Response:
    """
    Map a verification failure to a response.

    - VerificationError -> 401 Unauthorized
    - any other error -> 500 Internal Server Error
    """
    if isinstance(exc, VerificationError):
        return PlainTextResponse("Unauthorized", status_code=HTTP_401_UNAUTHORIZED)
    return PlainTextResponse("Internal Server Error", status_code=HTTP_500_INTERNAL_SERVER_ERROR)


class SignatureVerificationMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose signature does not verify.

    Args:
        app: ASGI application to protect
        verifier: Verification backend shared by all requests
        error_handler: Maps a failure to a response (default: default_error_handler)
    """

    def __init__(
        self,
        app: ASGIApp,
        verifier: Verifier,
        error_handler: Optional[ErrorHandler] = None,
    ):
        super().__init__(app)
        self.verifier = verifier
        self.error_handler = error_handler or default_error_handler

    async def dispatch(self, request: Request, call_next):
        try:
            verify_request(request, self.verifier)
        except VerificationError as e:
            logger.warning(
                f"Signature verification failed for {request.method} {request.url.path}: "
                f"{e.reason.value} - {e}"
            )
            return self.error_handler(request, e)
        except Exception as e:
            logger.error(
                f"Signature verification error for {request.method} {request.url.path}: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            return self.error_handler(request, e)

        return await call_next(request)
