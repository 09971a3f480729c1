"""
Storefront Backend Configuration.

Environment-based configuration using Pydantic Settings.
All sensitive values must be set via environment variables.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Top-Up Storefront"
    app_version: str = "1.0.0"
    debug: bool = False

    # API
    api_v1_prefix: str = "/api/v1"

    # Order sessions
    session_secret: SecretStr
    order_token_ttl_seconds: int = 60 * 60 * 24  # 24 hours

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    @field_validator("session_secret")
    @classmethod
    def validate_session_secret(cls, v: SecretStr) -> SecretStr:
        """Refuse to start with a weak signing secret."""
        if len(v.get_secret_value()) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"SESSION_SECRET must be at least {MIN_SECRET_LENGTH} characters"
            )
        return v

    @field_validator("order_token_ttl_seconds")
    @classmethod
    def validate_token_ttl(cls, v: int) -> int:
        """Token lifetime must be positive."""
        if v <= 0:
            raise ValueError("ORDER_TOKEN_TTL_SECONDS must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
