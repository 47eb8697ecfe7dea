"""Configuration management using pydantic-settings."""

from .settings import (
    CatalogSettings,
    HostSettings,
    LoggingSettings,
    ServerSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CatalogSettings",
    "HostSettings",
    "LoggingSettings",
    "ServerSettings",
    "clear_settings_cache",
    "get_settings",
]
