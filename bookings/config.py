"""Application configuration via environment variables."""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

from bookings.errors import ConfigurationError

log = logging.getLogger("bookings.config")


class Settings(BaseSettings):
    # Clerk (OAuth token broker)
    clerk_secret_key: str = ""
    clerk_api_url: str = "https://api.clerk.com/v1"
    clerk_oauth_provider: str = "oauth_google"
    http_timeout_seconds: float = 10.0

    # Google Calendar
    google_calendar_id: str = "primary"

    # Database
    database_url: str = "sqlite+aiosqlite:///./bookings.db"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Hosted Postgres URLs come without a driver; the store needs asyncpg."""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []
        _placeholders = {"sk_test_...", "sk_live_..."}

        if not self.clerk_secret_key or self.clerk_secret_key in _placeholders:
            raise ConfigurationError(
                "CLERK_SECRET_KEY is missing or still a placeholder. "
                "Set it in .env to fetch Google OAuth tokens."
            )

        if self.database_url.startswith("sqlite") and not self.debug:
            warnings.append(
                "DATABASE_URL points at SQLite with DEBUG=false. "
                "Use Postgres in production."
            )

        return warnings


settings = Settings()
