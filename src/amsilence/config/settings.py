"""
Application settings using Pydantic.

Provides environment-based configuration loading with AMSILENCE_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Alertmanager
    alertmanager_api: str = "http://localhost:9093/api/v2"

    # Logging
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = []
    listen_host: str = "0.0.0.0"
    listen_port: int = 8080

    # HTTP client settings
    http_timeout: float = 30.0
    http_max_retries: int = 3
    http_retry_backoff_factor: float = 0.5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "AMSILENCE_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
