"""
Ed25519 Signing Backend

Signs and verifies messages with Ed25519. Keys may be given as cryptography
key objects or as raw 32-byte values.
"""

from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from httpsign.core.signing.base import Signer, Verifier
from httpsign.core.signing.errors import InvalidKeyError

KEY_SIZE = 32


def _public_key(key: Union[Ed25519PublicKey, bytes]) -> Ed25519PublicKey:
    if isinstance(key, Ed25519PublicKey):
        return key
    if isinstance(key, (bytes, bytearray)):
        if len(key) != KEY_SIZE:
            raise InvalidKeyError(
                f"ed25519: bad public key length: {len(key)} bytes (expected {KEY_SIZE})"
            )
        return Ed25519PublicKey.from_public_bytes(bytes(key))
    raise InvalidKeyError(f"ed25519: not an Ed25519 public key: {type(key).__name__}")


def _private_key(key: Union[Ed25519PrivateKey, bytes]) -> Ed25519PrivateKey:
    if isinstance(key, Ed25519PrivateKey):
        return key
    if isinstance(key, (bytes, bytearray)):
        if len(key) != KEY_SIZE:
            raise InvalidKeyError(
                f"ed25519: bad private key length: {len(key)} bytes (expected {KEY_SIZE})"
            )
        return Ed25519PrivateKey.from_private_bytes(bytes(key))
    raise InvalidKeyError(f"ed25519: not an Ed25519 private key: {type(key).__name__}")


class Ed25519Verifier(Verifier):
    """Verifies Ed25519 message signatures."""

    def __init__(self, public_key: Union[Ed25519PublicKey, bytes]):
        self._public_key = _public_key(public_key)

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self._public_key

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            self._public_key.verify(signature, message)
        except InvalidSignature:
            return False
        return True


class Ed25519Signer(Ed25519Verifier, Signer):
    """Signs messages using Ed25519."""

    def __init__(self, private_key: Union[Ed25519PrivateKey, bytes]):
        self._private_key = _private_key(private_key)
        super().__init__(self._private_key.public_key())

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message)
