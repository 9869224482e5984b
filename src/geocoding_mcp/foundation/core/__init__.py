"""Tool base class and metadata."""

from .base import BaseTool, ToolMetadata, TParams

__all__ = ["BaseTool", "ToolMetadata", "TParams"]
