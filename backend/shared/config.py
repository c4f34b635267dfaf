"""
Centralized configuration for the Task Attachments backend.

All settings are loaded from environment variables with sensible defaults.
The JWT signing secret is mandatory outside development.
"""

import logging
import secrets
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, PrivateAttr, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Task Attachments Auth"
    environment: Literal["development", "test", "production"] = "development"
    log_level: str = "INFO"

    # Token signing
    jwt_secret: Optional[SecretStr] = None
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    token_issuer: str = "task-attachments-app"
    token_ttl_hours: int = Field(default=24, gt=0)

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    _ephemeral_secret: Optional[str] = PrivateAttr(default=None)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _require_secret_outside_development(self) -> "Settings":
        if self.environment != "development" and not self._configured_secret():
            raise ValueError(
                f"JWT_SECRET must be set when ENVIRONMENT={self.environment}"
            )
        return self

    def _configured_secret(self) -> str:
        if self.jwt_secret is None:
            return ""
        return self.jwt_secret.get_secret_value().strip()

    def signing_secret(self) -> str:
        """
        Return the symmetric key used to sign session tokens.

        In development without JWT_SECRET a random key is generated once per
        settings instance, so tokens do not survive a restart.
        """
        configured = self._configured_secret()
        if configured:
            return configured

        if self._ephemeral_secret is None:
            logger.warning(
                "JWT_SECRET is not set; using a random per-process signing secret "
                "(development only)"
            )
            self._ephemeral_secret = secrets.token_urlsafe(48)
        return self._ephemeral_secret


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
