"""Application settings using pydantic-settings."""

import re
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.services.token_codec import TokenConfig

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as ``15m``, ``2h``, ``7d`` or ``900``.

    A bare number is read as seconds.

    Args:
        value: Duration string

    Returns:
        Equivalent timedelta

    Raises:
        ValueError: If the string is not a positive duration
    """
    match = _DURATION_PATTERN.match(value)
    if match is None:
        raise ValueError(
            f"Invalid duration '{value}'. Use a number followed by s, m, h or d (e.g. '15m')."
        )

    amount, unit = match.groups()
    if int(amount) <= 0:
        raise ValueError(f"Duration must be positive, got '{value}'")

    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    """Application configuration - single source of truth.

    All settings loaded from environment variables or .env files.

    Usage:
        settings = get_settings()
        print(settings.database_url)
        print(settings.token_config.access_token_ttl)
    """

    # Database
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)
    db_user: str = Field(default="postgres")
    db_password: str = Field(default="postgres")
    db_name: str = Field(default="session_ledger")
    db_echo: bool = Field(default=False)
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)

    # Security
    access_token_secret: str = Field(
        default="",
        description="Signing secret for access tokens. Signing fails while unset.",
    )
    refresh_token_secret: str = Field(
        default="",
        description="Signing secret for refresh tokens, independent of the access secret.",
    )
    access_token_expires_in: str = Field(default="15m")
    refresh_token_expires_days: int = Field(default=7, ge=1)
    jwt_algorithm: str = Field(default="HS256")

    # Application
    environment: Literal["dev", "prod", "test"] = Field(default="dev")
    debug: bool = Field(default=False)
    app_name: str = Field(default="Session Ledger API")
    app_version: str = Field(default="1.0.0")

    # CORS
    cors_origins: str = Field(default="http://localhost:3000")

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("access_token_expires_in")
    @classmethod
    def validate_access_token_expires_in(cls, v: str) -> str:
        """Ensure the access token lifetime is a readable duration."""
        parse_duration(v)
        return v

    @property
    def access_token_ttl(self) -> timedelta:
        """Access token lifetime as a timedelta."""
        return parse_duration(self.access_token_expires_in)

    @property
    def token_config(self) -> TokenConfig:
        """Build the immutable token configuration handed to the codec and session service."""
        return TokenConfig(
            access_token_secret=self.access_token_secret,
            refresh_token_secret=self.refresh_token_secret,
            access_token_ttl=self.access_token_ttl,
            refresh_token_days=self.refresh_token_expires_days,
            algorithm=self.jwt_algorithm,
        )

    @property
    def signing_configured(self) -> bool:
        """Check that both signing secrets are present."""
        return bool(self.access_token_secret) and bool(self.refresh_token_secret)

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def database_url(self) -> str:
        """Build async PostgreSQL URL."""
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once and cached for the application lifecycle.
    For testing, clear the cache with: get_settings.cache_clear()

    Returns:
        Settings instance loaded from environment
    """
    return Settings()
