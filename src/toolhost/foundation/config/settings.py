"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from toolhost.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.catalog.base_url
    'http://localhost:57724'

    # Or with environment variables:
    # TOOLHOST_CATALOG_BASE_URL=http://catalog.internal:8080
    # TOOLHOST_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="TOOLHOST_LOG_", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class CatalogSettings(BaseSettings):
    """External product catalog collaborator."""

    model_config = SettingsConfigDict(env_prefix="TOOLHOST_CATALOG_", extra="ignore")

    base_url: str = Field(default="http://localhost:57724", description="Root URL of the products REST API")
    timeout: PositiveFloat | None = Field(default=None, description="Request timeout in seconds (None waits forever)")

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ServerSettings(BaseSettings):
    """Tool server configuration."""

    model_config = SettingsConfigDict(env_prefix="TOOLHOST_SERVER_", extra="ignore")

    name: str = "toolhost"


class HostSettings(BaseSettings):
    """Root settings for the tool host.

    Loads configuration from environment variables with TOOLHOST_ prefix.

    Example environment variables:
        TOOLHOST_DEBUG=true
        TOOLHOST_LOG_FORMAT=json
        TOOLHOST_CATALOG_TIMEOUT=10
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLHOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Include tracebacks in fault responses")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


@lru_cache(maxsize=1)
def get_settings() -> HostSettings:
    """Get the global settings instance (cached)."""
    return HostSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
