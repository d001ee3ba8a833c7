# aggregator/config.py
"""
Centralized configuration with validation.

Uses pydantic-settings to load and validate all environment variables at startup.
Fail fast with clear error messages if required config is missing.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = Field(
        ...,
        description="Database connection URL (PostgreSQL in production, SQLite locally)",
    )

    # News API credentials
    NEWSAPI_KEY: str | None = Field(
        default=None,
        description="NewsAPI.org API key",
    )
    GUARDIAN_API_KEY: str | None = Field(
        default=None,
        description="The Guardian Open Platform API key",
    )
    NYT_API_KEY: str | None = Field(
        default=None,
        description="New York Times developer API key",
    )

    # HTTP transport
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Per-request timeout for news API calls",
    )
    HTTP_RETRY_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        description="Total attempts per news API request (transient failures only)",
    )
    HTTP_RETRY_DELAY_MS: int = Field(
        default=100,
        ge=0,
        description="Flat delay between attempts in milliseconds",
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level: DEBUG, INFO, WARNING, ERROR",
    )
    LOG_JSON: bool = Field(
        default=True,
        description="Emit single-line JSON logs (False for human-readable output)",
    )

    # CORS
    CORS_ORIGINS: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def fix_database_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but SQLAlchemy needs postgresql+psycopg2://"""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg2://", 1)
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings. Call at startup to validate config."""
    return Settings()
