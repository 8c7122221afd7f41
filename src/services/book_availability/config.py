"""
Book Availability Service Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .adapters.library_api import DEFAULT_API_BASE_URL


class BookAvailabilityConfig(BaseSettings):
    """
    Configuration for the Book Availability Service.

    Reads from environment variables with BOOK_AVAILABILITY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOK_AVAILABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Availability API
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Root URL of the book availability API",
    )
    auth_keys: str = Field(
        default="",
        description="Comma-separated API keys, tried in this order",
    )

    # Search
    search_radius_km: float = Field(
        default=5.0,
        ge=0.0,
        description="Default search radius around the requester in kilometres",
    )

    # Network boundary
    timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Timeout for availability API calls",
    )
    connect_timeout_seconds: float = Field(
        default=3.0,
        gt=0.0,
        description="Connect timeout for availability API calls",
    )
    retry_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per credential for transient network failures",
    )
    retry_base_delay: float = Field(
        default=0.5,
        ge=0.0,
        description="Base delay for exponential backoff in seconds",
    )
    max_connections: int = Field(
        default=100,
        ge=1,
        description="HTTP connection pool size",
    )

    # Fan-out
    max_concurrency: int | None = Field(
        default=None,
        ge=1,
        description="Maximum probes in flight per request (unbounded if unset)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def credentials(self) -> tuple[str, ...]:
        """API keys in configured order, blanks dropped."""
        return tuple(key.strip() for key in self.auth_keys.split(",") if key.strip())


def load_config() -> BookAvailabilityConfig:
    """Load configuration from environment."""
    return BookAvailabilityConfig()
