"""
ECDSA Signing Backend

Signatures are ASN.1 DER encoded, as produced by cryptography.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec

from httpsign.core.signing.base import HashLike, Signer, Verifier, resolve_hash
from httpsign.core.signing.errors import InvalidKeyError


class ECDSAVerifier(Verifier):
    """Verifies ECDSA message signatures."""

    def __init__(self, public_key: ec.EllipticCurvePublicKey, hash: HashLike = "sha256"):
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise InvalidKeyError(f"ecdsa: not an EC public key: {type(public_key).__name__}")
        self._public_key = public_key
        self._algorithm = ec.ECDSA(resolve_hash(hash))

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._public_key

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            self._public_key.verify(signature, message, self._algorithm)
        except InvalidSignature:
            return False
        return True


class ECDSASigner(ECDSAVerifier, Signer):
    """Signs messages using ECDSA with the configured hash."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey, hash: HashLike = "sha256"):
        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise InvalidKeyError(f"ecdsa: not an EC private key: {type(private_key).__name__}")
        self._private_key = private_key
        super().__init__(private_key.public_key(), hash)

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message, self._algorithm)
