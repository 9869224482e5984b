"""Configuration management using pydantic-settings."""

from .settings import (
    API_KEY_REQUIRED,
    ConfigError,
    GeocodingSettings,
    LoggingSettings,
    load_settings,
)

__all__ = [
    "API_KEY_REQUIRED",
    "ConfigError",
    "GeocodingSettings",
    "LoggingSettings",
    "load_settings",
]
