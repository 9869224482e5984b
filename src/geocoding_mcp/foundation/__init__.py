"""Foundation - core building blocks: tool abstractions, errors, registry, config."""

from __future__ import annotations

__all__ = [
    # Core
    "BaseTool", "ToolMetadata",
    # Errors
    "ErrorCode", "ToolError", "ToolException", "classify_exception", "format_validation_error",
    "Result", "Ok", "Err", "ToolResult",
    # Registry
    "ToolRegistry",
    # Config
    "GeocodingSettings", "LoggingSettings", "ConfigError", "load_settings",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("BaseTool", "ToolMetadata"):
        from . import core
        return getattr(core, name)

    if name in ("ErrorCode", "ToolError", "ToolException", "classify_exception", "format_validation_error",
                "Result", "Ok", "Err", "ToolResult"):
        from . import errors
        return getattr(errors, name)

    if name == "ToolRegistry":
        from .registry import ToolRegistry
        return ToolRegistry

    if name in ("GeocodingSettings", "LoggingSettings", "ConfigError", "load_settings"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
