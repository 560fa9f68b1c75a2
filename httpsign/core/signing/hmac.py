"""
HMAC Signing Backend

Symmetric: the same key signs and verifies, so client and server share it.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac

from httpsign.core.signing.base import HashLike, SignerVerifier, resolve_hash
from httpsign.core.signing.errors import InvalidKeyError


class HMAC(SignerVerifier):
    """Signs messages and verifies message signatures using HMAC."""

    def __init__(self, key: bytes, hash: HashLike = "sha256"):
        if not isinstance(key, (bytes, bytearray)):
            raise InvalidKeyError(f"hmac: key must be bytes, got {type(key).__name__}")
        self._key = bytes(key)
        self._hash = resolve_hash(hash)

    def _mac(self) -> hmac.HMAC:
        return hmac.HMAC(self._key, self._hash)

    def sign(self, message: bytes) -> bytes:
        h = self._mac()
        h.update(message)
        return h.finalize()

    def verify(self, message: bytes, signature: bytes) -> bool:
        h = self._mac()
        h.update(message)
        try:
            h.verify(signature)  # constant-time
        except InvalidSignature:
            return False
        return True
