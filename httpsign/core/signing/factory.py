"""
Backend Factory

Builds the configured Signer (client side) or Verifier (server side) from
Settings.
"""

import logging
from typing import Optional

from httpsign.core.config import ALGORITHMS, Settings, get_settings
from httpsign.core.signing.base import Signer, Verifier
from httpsign.core.signing.ecdsa import ECDSASigner, ECDSAVerifier
from httpsign.core.signing.ed25519 import Ed25519Signer, Ed25519Verifier
from httpsign.core.signing.errors import ConfigurationError
from httpsign.core.signing.hmac import HMAC
from httpsign.core.signing.keys import load_private_key, load_public_key, load_secret
from httpsign.core.signing.rsa import (
    PKCSSigner,
    PKCSVerifier,
    PSSOptions,
    PSSSigner,
    PSSVerifier,
)

logger = logging.getLogger(__name__)


def _check_algorithm(settings: Settings) -> str:
    name = settings.algorithm_name
    if name not in ALGORITHMS:
        raise ConfigurationError(
            f"Unknown signing algorithm '{settings.algorithm}' (expected one of {', '.join(ALGORITHMS)})"
        )
    return name


def _hmac(settings: Settings) -> HMAC:
    if settings.hmac_secret:
        return HMAC(settings.hmac_secret.encode("utf-8"), settings.hash)
    if settings.hmac_secret_path:
        return HMAC(load_secret(settings.hmac_secret_path), settings.hash)
    raise ConfigurationError("hmac requires HTTPSIGN_HMAC_SECRET or HTTPSIGN_HMAC_SECRET_PATH")


def _pss_options(settings: Settings) -> PSSOptions:
    return PSSOptions(hash=settings.hash, salt_length=settings.pss_salt_length)


def load_signer(settings: Optional[Settings] = None) -> Signer:
    """
    Build the signing backend described by settings.

    Raises:
        ConfigurationError: If the algorithm is unknown or key material is missing
    """
    settings = settings or get_settings()
    name = _check_algorithm(settings)

    if name == "hmac":
        signer = _hmac(settings)
    else:
        if not settings.private_key_path:
            raise ConfigurationError(f"{name} requires HTTPSIGN_PRIVATE_KEY_PATH")
        key = load_private_key(settings.private_key_path, settings.private_key_password)
        if name == "ed25519":
            signer = Ed25519Signer(key)
        elif name == "ecdsa":
            signer = ECDSASigner(key, settings.hash)
        elif name == "rsa-pkcs":
            signer = PKCSSigner(key, settings.hash)
        else:
            signer = PSSSigner(key, _pss_options(settings))

    logger.info(f"Loaded {name} signer")
    return signer


def load_verifier(settings: Optional[Settings] = None) -> Verifier:
    """
    Build the verification backend described by settings.

    Raises:
        ConfigurationError: If the algorithm is unknown or key material is missing
    """
    settings = settings or get_settings()
    name = _check_algorithm(settings)

    if name == "hmac":
        verifier = _hmac(settings)
    else:
        if not settings.public_key_path:
            raise ConfigurationError(f"{name} requires HTTPSIGN_PUBLIC_KEY_PATH")
        key = load_public_key(settings.public_key_path)
        if name == "ed25519":
            verifier = Ed25519Verifier(key)
        elif name == "ecdsa":
            verifier = ECDSAVerifier(key, settings.hash)
        elif name == "rsa-pkcs":
            verifier = PKCSVerifier(key, settings.hash)
        else:
            verifier = PSSVerifier(key, _pss_options(settings))

    logger.info(f"Loaded {name} verifier")
    return verifier
