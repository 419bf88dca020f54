"""Configuration module with YAML and environment variable support."""

from .settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    Settings,
    get_settings,
)


__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
