"""
Signature Capability

Abstract interfaces that every algorithm backend implements. The client
transport only needs a Signer and the server middleware only needs a
Verifier, so a public key can be handed out without the private half.

Implementations must be safe for concurrent use from many threads or tasks
without external locking.
"""

from abc import ABC, abstractmethod
from typing import Dict, Type, Union

from cryptography.hazmat.primitives import hashes

from httpsign.core.signing.errors import HashUnavailableError


class Signer(ABC):
    """Signs messages."""

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Canonical message bytes

        Returns:
            Raw signature bytes
        """
        ...


class Verifier(ABC):
    """Verifies message signatures."""

    @abstractmethod
    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Verify a signature over a message.

        Returns:
            True if the signature matches, False otherwise. Exceptions are
            reserved for failures other than a mismatch.
        """
        ...


class SignerVerifier(Signer, Verifier):
    """A backend holding key material for both directions."""


HashLike = Union[str, hashes.HashAlgorithm]

_HASHES: Dict[str, Type[hashes.HashAlgorithm]] = {
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512_224": hashes.SHA512_224,
    "sha512_256": hashes.SHA512_256,
    "sha3_224": hashes.SHA3_224,
    "sha3_256": hashes.SHA3_256,
    "sha3_384": hashes.SHA3_384,
    "sha3_512": hashes.SHA3_512,
}


def resolve_hash(algorithm: HashLike) -> hashes.HashAlgorithm:
    """
    Resolve a hash name or instance to a cryptography hash algorithm.

    Names are case-insensitive and accept "-" in place of "_"
    (e.g. "SHA-256", "sha3-256").

    Raises:
        HashUnavailableError: If the hash is unknown
    """
    if isinstance(algorithm, hashes.HashAlgorithm):
        return algorithm
    if not isinstance(algorithm, str):
        raise HashUnavailableError(algorithm)

    key = algorithm.strip().lower().replace("-", "_")
    if key.startswith("sha_"):
        key = "sha" + key[4:]
    hash_cls = _HASHES.get(key)
    if hash_cls is None:
        raise HashUnavailableError(algorithm)
    return hash_cls()
