"""
Signing Transport

httpx transports that sign every outgoing request before handing it to an
underlying transport.

Example:
    >>> signer = Ed25519Signer(private_key)
    >>> with signing_client(signer, base_url="https://api.example.com") as client:
    ...     client.get("/api/emails", params={"limit": 10})
"""

import logging
from typing import Any, Optional

import httpx

from httpsign.core.signing.base import Signer
from httpsign.core.signing.canonical import parse_query
from httpsign.core.signing.envelope import signature_headers
from httpsign.core.signing.errors import SignRequestError

logger = logging.getLogger(__name__)


def _escaped_path(url: httpx.URL) -> str:
    return url.raw_path.split(b"?", 1)[0].decode("ascii")


def _host(request: httpx.Request) -> str:
    return request.headers.get("host") or request.url.netloc.decode("ascii")


def sign_request(request: httpx.Request, signer: Signer) -> httpx.Request:
    """
    Return a signed copy of a request.

    The caller's request is left untouched; the copy shares its body stream.

    Raises:
        Exception: Whatever the signer raises
    """
    headers = signature_headers(
        signer,
        method=request.method,
        host=_host(request),
        path=_escaped_path(request.url),
        query=parse_query(request.url.query),
    )
    signed = httpx.Request(
        request.method,
        request.url,
        headers=request.headers.copy(),
        stream=request.stream,
        extensions=dict(request.extensions),
    )
    signed.headers.update(headers)
    return signed


class SigningTransport(httpx.BaseTransport):
    """
    Transport that signs outgoing requests with a Signer.

    Attributes:
        base: Transport used to send the signed request
            (default: httpx.HTTPTransport())
    """

    def __init__(self, signer: Signer, base: Optional[httpx.BaseTransport] = None):
        self.base = base if base is not None else httpx.HTTPTransport()
        self._signer = signer

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        try:
            signed = sign_request(request, self._signer)
        except Exception as e:
            # The base transport never sees this body, so release it here.
            if isinstance(request.stream, httpx.SyncByteStream):
                request.stream.close()
            logger.error(f"Failed to sign {request.method} {request.url}: {e}")
            raise SignRequestError(f"sign request: {e}") from e

        logger.debug(f"Signed {signed.method} {signed.url}")
        return self.base.handle_request(signed)

    def close(self) -> None:
        self.base.close()


class AsyncSigningTransport(httpx.AsyncBaseTransport):
    """
    Async variant of SigningTransport.

    Attributes:
        base: Transport used to send the signed request
            (default: httpx.AsyncHTTPTransport())
    """

    def __init__(self, signer: Signer, base: Optional[httpx.AsyncBaseTransport] = None):
        self.base = base if base is not None else httpx.AsyncHTTPTransport()
        self._signer = signer

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        try:
            signed = sign_request(request, self._signer)
        except Exception as e:
            if isinstance(request.stream, httpx.AsyncByteStream):
                await request.stream.aclose()
            logger.error(f"Failed to sign {request.method} {request.url}: {e}")
            raise SignRequestError(f"sign request: {e}") from e

        logger.debug(f"Signed {signed.method} {signed.url}")
        return await self.base.handle_async_request(signed)

    async def aclose(self) -> None:
        await self.base.aclose()


def signing_client(
    signer: Signer,
    base: Optional[httpx.BaseTransport] = None,
    **kwargs: Any,
) -> httpx.Client:
    """Create an httpx.Client whose requests are signed by signer."""
    return httpx.Client(transport=SigningTransport(signer, base), **kwargs)


def async_signing_client(
    signer: Signer,
    base: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient whose requests are signed by signer."""
    return httpx.AsyncClient(transport=AsyncSigningTransport(signer, base), **kwargs)
