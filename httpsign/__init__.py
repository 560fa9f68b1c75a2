"""
httpsign: sign outgoing HTTP requests and verify them on the server.

- httpsign.core.signing: canonical message, envelope, algorithm backends
- httpsign.client: httpx signing transports
- httpsign.api: Starlette middleware and FastAPI dependency
"""

__version__ = "1.0.0"
