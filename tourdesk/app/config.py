"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str | None = None

    # Cache
    redis_url: str | None = None

    # Travel ID allocation
    travel_id_max_attempts: int = 10
    travel_id_retry_delay_ms: int = 100

    # Rate limiting (requests per minute per client)
    crud_ops_per_min: int = 60
    travel_id_allocations_per_min: int = 20

    # Listing
    default_page_size: int = 20
    max_page_size: int = 100

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
