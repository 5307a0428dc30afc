"""Application settings using Pydantic BaseSettings."""

import re

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_async_database_url() -> str:
    """Get database URL converted for asyncpg driver."""
    url = settings.database_url
    # Convert postgres:// to postgresql+asyncpg:// for SQLAlchemy async
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    # asyncpg doesn't support sslmode, it uses ssl parameter
    if "sslmode=" in url:
        url = re.sub(r'[?&]sslmode=[^&]*', '', url)
        url = url.rstrip('?&')
    return url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (Postgres in production, SQLite for local dev)
    database_url: str = "sqlite+aiosqlite:///./concierge.db"

    # Identity provider tokens (authentication itself is external)
    identity_jwt_secret: str = "dev-secret-key-change-in-production"
    identity_jwt_algorithm: str = "HS256"
    identity_jwt_audience: str | None = None
    identity_token_expire_minutes: int = 60

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    api_v1_prefix: str = "/api/v1"
    default_timezone: str = "America/Toronto"

    # Twilio (SMS) - global fallback when a company has no credentials of its own
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_from_number: str | None = None

    # SendGrid (email)
    sendgrid_api_key: str | None = None
    sendgrid_from_email: str = "frontdesk@example.com"

    # Notifications
    notification_channel_timeout_seconds: float = 15.0

    # Resident lookup by phone: exact string match unless enabled
    phone_match_normalized: bool = False

    # Visitor parking
    visitor_parking_spots: list[str] = [f"V-{n}" for n in range(1, 11)]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
