"""Central registry for tool discovery and lookup."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel

from .core import BaseTool, ToolMetadata


class ToolRegistry:
    """Name -> tool mapping used by the dispatcher.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(ForwardGeocodeTool(service))
        >>> registry.get("geocode_forward").metadata.category
        'geocoding'
    """

    __slots__ = ("_tools",)

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool[BaseModel]] = {}

    def register(self, tool: BaseTool[BaseModel]) -> None:
        """Register a tool instance. Names must be unique."""
        name = tool.metadata.name
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered.")
        self._tools[name] = tool

    def register_all(self, *tools: BaseTool[BaseModel]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> BaseTool[BaseModel] | None:
        return self._tools.get(name)

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[BaseTool[BaseModel]]:
        return iter(self._tools.values())

    def list_tools(self) -> list[ToolMetadata]:
        """Metadata for registered tools, in registration order."""
        return [t.metadata for t in self._tools.values() if t.metadata.enabled]

    def describe(self) -> str:
        """Markdown list of tools for prompts and `--list-tools` output."""
        return "\n".join(
            f"- **{m.name}** ({m.category}): {m.description}" for m in self.list_tools()
        )
