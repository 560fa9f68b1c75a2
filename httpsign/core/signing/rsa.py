"""
RSA Signing Backends

Two padding schemes are supported:
- PKCS#1 v1.5 (PKCSSigner / PKCSVerifier)
- PSS (PSSSigner / PSSVerifier)
"""

from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from httpsign.core.signing.base import HashLike, Signer, Verifier, resolve_hash
from httpsign.core.signing.errors import InvalidKeyError


def _check_public(key) -> rsa.RSAPublicKey:
    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidKeyError(f"rsa: not an RSA public key: {type(key).__name__}")
    return key


def _check_private(key) -> rsa.RSAPrivateKey:
    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidKeyError(f"rsa: not an RSA private key: {type(key).__name__}")
    return key


class PKCSVerifier(Verifier):
    """Verifies RSA PKCS#1 v1.5 message signatures."""

    def __init__(self, public_key: rsa.RSAPublicKey, hash: HashLike = "sha256"):
        self._public_key = _check_public(public_key)
        self._hash = resolve_hash(hash)

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            self._public_key.verify(signature, message, padding.PKCS1v15(), self._hash)
        except InvalidSignature:
            return False
        return True


class PKCSSigner(PKCSVerifier, Signer):
    """Signs messages using RSA PKCS#1 v1.5."""

    def __init__(self, private_key: rsa.RSAPrivateKey, hash: HashLike = "sha256"):
        self._private_key = _check_private(private_key)
        super().__init__(private_key.public_key(), hash)

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message, padding.PKCS1v15(), self._hash)


@dataclass(frozen=True)
class PSSOptions:
    """
    RSA-PSS parameters.

    Attributes:
        hash: Message and MGF1 hash
        salt_length: Salt length in bytes. When None, signing uses the
            maximum length and verification detects it from the signature.
    """
    hash: HashLike = "sha256"
    salt_length: Optional[int] = None


class PSSVerifier(Verifier):
    """Verifies RSA-PSS message signatures."""

    def __init__(self, public_key: rsa.RSAPublicKey, options: Optional[PSSOptions] = None):
        options = options or PSSOptions()
        self._public_key = _check_public(public_key)
        self._hash = resolve_hash(options.hash)
        self._options = options

    def _padding(self, salt_length) -> padding.PSS:
        return padding.PSS(mgf=padding.MGF1(self._hash), salt_length=salt_length)

    def verify(self, message: bytes, signature: bytes) -> bool:
        salt_length = self._options.salt_length
        if salt_length is None:
            salt_length = padding.PSS.AUTO
        try:
            self._public_key.verify(signature, message, self._padding(salt_length), self._hash)
        except InvalidSignature:
            return False
        return True


class PSSSigner(PSSVerifier, Signer):
    """Signs messages using RSA-PSS."""

    def __init__(self, private_key: rsa.RSAPrivateKey, options: Optional[PSSOptions] = None):
        self._private_key = _check_private(private_key)
        super().__init__(private_key.public_key(), options)

    def sign(self, message: bytes) -> bytes:
        salt_length = self._options.salt_length
        if salt_length is None:
            salt_length = padding.PSS.MAX_LENGTH
        return self._private_key.sign(message, self._padding(salt_length), self._hash)
