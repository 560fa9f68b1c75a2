"""
Key Loading

Loads signing keys from PEM files and HMAC secrets from plain files.
Uses the cryptography library for all key parsing.
"""

from pathlib import Path
from typing import Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)

from httpsign.core.signing.errors import InvalidKeyError

PathLike = Union[str, Path]


def _as_password(password: Optional[Union[str, bytes]]) -> Optional[bytes]:
    if isinstance(password, str):
        return password.encode("utf-8")
    return password


def load_private_key(
    path: PathLike,
    password: Optional[Union[str, bytes]] = None,
) -> PrivateKeyTypes:
    """
    Load a private key from a PEM file.

    Args:
        path: Path to private key file (PKCS#8 or traditional PEM)
        password: Password if the key is encrypted

    Returns:
        Private key object (Ed25519, EC or RSA)

    Raises:
        FileNotFoundError: If file doesn't exist
        InvalidKeyError: If key is invalid
    """
    path = Path(path).expanduser()
    pem_data = path.read_bytes()

    try:
        return serialization.load_pem_private_key(pem_data, password=_as_password(password))
    except (ValueError, TypeError) as e:
        raise InvalidKeyError(f"Failed to load private key from {path}: {e}") from e


def load_public_key(path: PathLike) -> PublicKeyTypes:
    """
    Load a public key from a PEM file (SubjectPublicKeyInfo).

    Raises:
        FileNotFoundError: If file doesn't exist
        InvalidKeyError: If key is invalid
    """
    path = Path(path).expanduser()
    pem_data = path.read_bytes()

    try:
        return serialization.load_pem_public_key(pem_data)
    except (ValueError, TypeError) as e:
        raise InvalidKeyError(f"Failed to load public key from {path}: {e}") from e


def load_secret(path: PathLike) -> bytes:
    """Read an HMAC secret file, stripping one trailing newline."""
    path = Path(path).expanduser()
    data = path.read_bytes()
    if data.endswith(b"\r\n"):
        return data[:-2]
    if data.endswith(b"\n"):
        return data[:-1]
    return data
