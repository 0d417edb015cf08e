# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads database, email delivery, web and logging settings from environment and .env.

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "newsletter"
    db_user: str = "newsletter"
    db_password: SecretStr | None = None
    db_pool_size: int = 5
    db_pool_max_overflow: int = 10

    @property
    def database_url(self) -> str:
        """Build async PostgreSQL connection URL."""
        password = self.db_password.get_secret_value() if self.db_password else ""
        return f"postgresql+asyncpg://{self.db_user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def database_url_sync(self) -> str:
        """Build sync PostgreSQL connection URL (for Alembic)."""
        password = self.db_password.get_secret_value() if self.db_password else ""
        return (
            f"postgresql://{self.db_user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # Web
    app_base_url: str = "http://127.0.0.1:8000"  # Base URL for confirmation links
    app_host: str = "127.0.0.1"
    app_port: int = 8000

    # Email (common)
    email_backend: Literal["smtp", "http"] = "smtp"
    sender_email: str = "newsletter@example.com"
    sender_name: str = "Newsletter Desk"
    confirmation_email_subject: str = "Welcome! Please confirm your subscription"
    email_timeout: float = 10.0
    templates_dir: Path = PACKAGE_DIR / "email" / "templates"

    # Email / SMTP (only required when email_backend == "smtp")
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: SecretStr | None = None
    smtp_password: SecretStr | None = None

    # Email / HTTP API (only required when email_backend == "http")
    email_api_base_url: str = "https://api.postmarkapp.com"
    email_api_token: SecretStr | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    @field_validator("app_base_url", "email_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables and .env file.
    SMTP credentials and the email API token are optional until a send is attempted.
    """
    return Settings()
