"""Unified error handling.

- ErrorCode: Standard error codes for tool-call failures
- ToolError/ToolException: Structured errors and exceptions
- Result/Ok/Err: Explicit success/failure values
"""

from .errors import ErrorCode, ToolError, ToolException, classify_exception, format_validation_error
from .result import Err, Ok, Result
from .types import JsonDict, JsonPrimitive, JsonValue, ToolResult

__all__ = [
    "ErrorCode", "ToolError", "ToolException", "classify_exception", "format_validation_error",
    "Result", "Ok", "Err", "ToolResult",
    "JsonDict", "JsonPrimitive", "JsonValue",
]
