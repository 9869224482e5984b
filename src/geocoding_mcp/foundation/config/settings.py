"""Environment-based configuration using pydantic-settings.

Loads the Google Maps API key and request defaults from the process
environment (and an optional .env file). Settings are immutable once loaded.

Example:
    >>> from geocoding_mcp.foundation.config import load_settings
    >>> settings = load_settings()
    >>> settings.timeout
    5000
    >>> settings.default_language
    'en'

    # Environment variables:
    # GOOGLE_MAPS_API_KEY=AIza...
    # TIMEOUT=10000
    # DEFAULT_LANGUAGE=fr
    # DEFAULT_REGION=fr
    # LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

API_KEY_REQUIRED = (
    "GOOGLE_MAPS_API_KEY environment variable is required. "
    "Please set it to your Google Maps API key."
)
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_RATE_LIMIT = 10
DEFAULT_LANGUAGE = "en"


class ConfigError(Exception):
    """Raised when settings cannot be loaded. Fatal at startup."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("; ".join(messages))


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_ignore_empty=True,
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize_case(cls, v: object, info: ValidationInfo) -> object:
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "level" else v.lower()


class GeocodingSettings(BaseSettings):
    """Server configuration for the geocoding tools.

    Environment variables (no prefix):
        GOOGLE_MAPS_API_KEY  required
        TIMEOUT              upstream timeout in ms, 1000-30000 (default 5000)
        RATE_LIMIT           requests per second, 1-100 (advisory, not enforced)
        DEFAULT_LANGUAGE     language used when the caller omits one (default "en")
        DEFAULT_REGION       region bias used for forward geocoding when the caller omits one
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        validate_default=True,
    )

    api_key: SecretStr = Field(validation_alias="GOOGLE_MAPS_API_KEY", description="Google Maps API key")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, description="Upstream request timeout in milliseconds")
    rate_limit: int = Field(default=DEFAULT_RATE_LIMIT, description="Advisory requests-per-second budget")
    default_language: str = Field(default=DEFAULT_LANGUAGE)
    default_region: str | None = Field(default=None)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("api_key")
    @classmethod
    def _require_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError(API_KEY_REQUIRED)
        return v

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, v: int) -> int:
        if not 1000 <= v <= 30000:
            raise ValueError("TIMEOUT must be between 1000 and 30000 milliseconds")
        return v

    @field_validator("rate_limit")
    @classmethod
    def _check_rate_limit(cls, v: int) -> int:
        if not 1 <= v <= 100:
            raise ValueError("RATE_LIMIT must be between 1 and 100 requests per second")
        return v


def _messages(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into the human-readable diagnostics printed at startup."""
    out: list[str] = []
    for err in exc.errors():
        if err["type"] == "missing" and err["loc"] and err["loc"][0] in ("GOOGLE_MAPS_API_KEY", "api_key"):
            out.append(API_KEY_REQUIRED)
            continue
        msg = err["msg"].removeprefix("Value error, ")
        field = ".".join(str(p) for p in err["loc"])
        out.append(msg if err["type"] == "value_error" else f"{field.upper()}: {msg}")
    return out


def load_settings(**overrides: object) -> GeocodingSettings:
    """Load and validate settings, raising ConfigError with readable messages."""
    try:
        return GeocodingSettings(**overrides)
    except ValidationError as e:
        raise ConfigError(_messages(e)) from e
