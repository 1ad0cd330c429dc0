"""Configuration management for the Mailgun REST client."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mailgun_client.constants import DEFAULT_API_HOST, DEFAULT_API_VERSION


class Settings(BaseSettings):
    """Client settings loaded from ``MAILGUN_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MAILGUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Mailgun API Configuration
    api_key: str = Field(default="", description="Mailgun API key")
    api_host: str = Field(default=DEFAULT_API_HOST, description="Mailgun API host")
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="Mailgun API version path segment",
    )
    ssl: bool = Field(default=True, description="Use https for API requests")

    # HTTP Transport Configuration
    api_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for the default HTTP transport",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or console)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
