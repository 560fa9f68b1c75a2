"""
Shared fixtures for httpsign tests.
"""
import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from fastapi import FastAPI
from fastapi.testclient import TestClient

from httpsign.api.middleware import SignatureVerificationMiddleware
from httpsign.core.signing.base import Signer, Verifier


class StubSigner(Signer):
    """Signature is the message itself."""

    def sign(self, message: bytes) -> bytes:
        return message


class StubVerifier(Verifier):
    """Accepts a signature equal to the message."""

    def __init__(self):
        self.messages = []

    def verify(self, message: bytes, signature: bytes) -> bool:
        self.messages.append(message)
        return message == signature


class FailingSigner(Signer):
    def sign(self, message: bytes) -> bytes:
        raise RuntimeError("signing backend unavailable")


class FailingVerifier(Verifier):
    def verify(self, message: bytes, signature: bytes) -> bool:
        raise RuntimeError("verification backend unavailable")


@pytest.fixture
def stub_signer():
    return StubSigner()


@pytest.fixture
def stub_verifier():
    return StubVerifier()


@pytest.fixture(scope="session")
def ed25519_key():
    return Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def make_app(verifier: Verifier, **middleware_kwargs) -> FastAPI:
    """FastAPI app behind the verification middleware that counts handler calls."""
    app = FastAPI()
    app.state.calls = 0

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "DELETE"])
    async def catch_all(path: str):
        app.state.calls += 1
        return {"path": path}

    app.add_middleware(SignatureVerificationMiddleware, verifier=verifier, **middleware_kwargs)
    return app


@pytest.fixture
def failing_signer():
    return FailingSigner()


@pytest.fixture
def failing_verifier():
    return FailingVerifier()


@pytest.fixture
def app_factory():
    return make_app


@pytest.fixture
def stub_app(stub_verifier):
    return make_app(stub_verifier)


@pytest.fixture
def client(stub_app):
    with TestClient(stub_app) as test_client:
        yield test_client
