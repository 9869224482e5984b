"""Tool-call failures: error codes, the ToolError model and its exception wrapper.

Geocoding outcomes never use these; they are normalized into a
GeocodeResponse. ToolError covers what goes wrong around a tool: an unknown
tool name, arguments that do not fit the schema, an exception escaping a tool.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ErrorCode(StrEnum):
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    INVALID_PARAMS = "INVALID_PARAMS"
    PARSE_ERROR = "PARSE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN = "UNKNOWN"


# Checked in order against "<ExcType> <message>", lowercased
_PATTERN_CODES: tuple[tuple[str, ErrorCode], ...] = (
    ("timeout", ErrorCode.TIMEOUT),
    ("connect", ErrorCode.NETWORK_ERROR),
    ("network", ErrorCode.NETWORK_ERROR),
    ("json", ErrorCode.PARSE_ERROR),
    ("decode", ErrorCode.PARSE_ERROR),
    ("validation", ErrorCode.INVALID_PARAMS),
    ("value", ErrorCode.INVALID_PARAMS),
)


@lru_cache(maxsize=256)
def _classify(text: str) -> ErrorCode:
    return next((code for pattern, code in _PATTERN_CODES if pattern in text), ErrorCode.EXTERNAL_SERVICE_ERROR)


def classify_exception(exc: Exception) -> ErrorCode:
    """Best-effort error code from the exception's type name and message."""
    return _classify(f"{type(exc).__name__} {exc}".lower())


class ToolError(BaseModel):
    """Structured tool-call failure.

    Attributes:
        tool_name: Tool the call was addressed to
        message: Human-readable message, rendered to the client as "Error: <message>"
        code: Machine-readable classification, used in logs
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "examples": [{"tool_name": "geocode_backward", "message": "Unknown tool: geocode_backward", "code": "NOT_FOUND"}],
        },
    )

    tool_name: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode = ErrorCode.UNKNOWN

    @classmethod
    def create(cls, tool_name: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN) -> Self:
        return cls(tool_name=tool_name, message=message, code=code)

    @classmethod
    def from_exception(cls, tool_name: str, exc: Exception, context: str = "") -> Self:
        """Wrap an exception; the message falls back to the exception's class name."""
        text = str(exc) or type(exc).__name__
        return cls(tool_name=tool_name, message=f"{context}: {text}" if context else text, code=classify_exception(exc))

    def render(self) -> str:
        return f"Error: {self.message}"

    __str__ = render


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line: `field: msg; field: msg`."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


class ToolException(Exception):
    """Raises a ToolError; `str()` is the rendered error text."""

    def __init__(self, error: ToolError) -> None:
        self.error = error
        super().__init__(error.render())
