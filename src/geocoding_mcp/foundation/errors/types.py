"""Shared type aliases for JSON payloads and tool results."""

from __future__ import annotations

from typing import Any, TypeAlias, Union

from .errors import ToolError
from .result import Result

# Any for recursive slots to avoid Pydantic resolution issues
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

ToolResult: TypeAlias = Result[str, ToolError]
