"""
Configuration Management

Centralized configuration using Pydantic Settings.
All settings loaded from HTTPSIGN_* environment variables (or .env).
"""
import logging
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

ALGORITHMS = ("ed25519", "ecdsa", "rsa-pkcs", "rsa-pss", "hmac")


class Settings(BaseSettings):
    """httpsign settings loaded from environment variables."""

    model_config = ConfigDict(
        env_prefix="HTTPSIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================
    # Signing backend
    # ============================================================
    algorithm: str = Field("ed25519", description="One of: " + ", ".join(ALGORITHMS))
    hash: str = Field("sha256", description="Hash for ecdsa, rsa-pkcs, rsa-pss and hmac")
    pss_salt_length: Optional[int] = Field(
        None, description="RSA-PSS salt length (default: max on sign, auto on verify)"
    )

    # ============================================================
    # Key material
    # ============================================================
    private_key_path: Optional[str] = Field(None, description="PEM private key (client side)")
    private_key_password: Optional[str] = Field(None, description="Password for the private key")
    public_key_path: Optional[str] = Field(None, description="PEM public key (server side)")
    hmac_secret: Optional[str] = Field(None, description="Shared HMAC secret")
    hmac_secret_path: Optional[str] = Field(None, description="File holding the shared HMAC secret")

    # ============================================================
    # Logging Configuration
    # ============================================================
    log_level: str = Field("INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )

    @property
    def algorithm_name(self) -> str:
        """Normalized algorithm name ("RSA_PSS" -> "rsa-pss")."""
        return self.algorithm.strip().lower().replace("_", "-")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get settings (singleton).

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the configured log level and format to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
