"""MCP server for the geocoding tools.

ToolServer owns dispatch: it resolves a tool by name, validates the raw
arguments against the tool's params model, and runs it. Protocol-level
defects (unknown tool, malformed arguments, an exception escaping a tool)
come back as Err(ToolError); everything else is the tool's JSON text.

MCPServer adapts that dispatcher to the MCP protocol over stdio using the
low-level `mcp` server, so the advertised input schemas are exactly the ones
derived from the params models.

Example:
    >>> server = MCPServer("google-maps-geocoding", registry)
    >>> await server.serve()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from geocoding_mcp import __version__
from geocoding_mcp.foundation.errors import (
    Err,
    ErrorCode,
    ToolError,
    ToolException,
    ToolResult,
    format_validation_error,
)
from geocoding_mcp.runtime.observability import get_logger

from .bridge import get_tool_schema

if TYPE_CHECKING:
    from geocoding_mcp.foundation.registry import ToolRegistry

DEFAULT_SERVER_NAME = "google-maps-geocoding"

log = get_logger("mcp")


# ═══════════════════════════════════════════════════════════════════════════════
# Abstract Server Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class ToolServer(ABC):
    """Abstract base for tool server implementations.

    Subclasses implement a transport; listing and dispatch are shared.
    """

    __slots__ = ("_name", "_registry")

    def __init__(self, name: str, registry: ToolRegistry) -> None:
        self._name = name
        self._registry = registry

    @abstractmethod
    async def serve(self) -> None:
        """Serve until the transport closes."""
        ...

    def list_tools(self) -> list[dict[str, Any]]:
        """Enabled tools with name, description and JSON Schema parameters."""
        return [
            {
                "name": tool.metadata.name,
                "description": tool.metadata.description,
                "inputSchema": get_tool_schema(tool),
            }
            for tool in self._registry
            if tool.metadata.enabled
        ]

    async def invoke(self, tool_name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Invoke a tool by name. Never raises for a failed call."""
        tool = self._registry.get(tool_name)
        if tool is None:
            log.warning("unknown tool", tool=tool_name)
            return Err(ToolError.create(tool_name, f"Unknown tool: {tool_name}", ErrorCode.NOT_FOUND))

        call_log = log.bind_tool(tool_name, tool.metadata.category)
        try:
            params = tool.params_schema.model_validate(arguments or {})
        except ValidationError as e:
            call_log.info("invalid parameters", errors=e.error_count())
            message = f"Invalid parameters: {format_validation_error(e)}"
            return Err(ToolError.create(tool_name, message, ErrorCode.INVALID_PARAMS))

        call_log.debug("tool call")
        result = await tool.arun_result(params)  # type: ignore[arg-type]
        return result.inspect_err(lambda err: call_log.error("tool failed", error=err.message, code=err.code.value))


# ═══════════════════════════════════════════════════════════════════════════════
# MCP Adapter
# ═══════════════════════════════════════════════════════════════════════════════


class MCPServer(ToolServer):
    """Low-level MCP server over stdio.

    Each call goes through `invoke`; an Err is raised as ToolException so the
    SDK returns the rendered text ("Error: ...") with `isError` set.
    """

    __slots__ = ("sdk",)

    def __init__(self, name: str, registry: ToolRegistry) -> None:
        super().__init__(name, registry)
        self.sdk = self._create_server()

    def _create_server(self) -> Server:
        server: Server = Server(self._name)

        @server.list_tools()
        async def _list_tools() -> list[types.Tool]:
            return [types.Tool(**spec) for spec in self.list_tools()]

        # Argument checking belongs to invoke so errors keep one format
        @server.call_tool(validate_input=False)
        async def _call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            result = await self.invoke(name, arguments)
            if result.is_err():
                raise ToolException(result.unwrap_err())
            return [types.TextContent(type="text", text=result.unwrap())]

        return server

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self._name,
            server_version=__version__,
            capabilities=self.sdk.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def serve(self) -> None:
        log.info("server starting", server=self._name, transport="stdio", tools=len(self._registry))
        async with stdio_server() as (read, write):
            await self.sdk.run(read, write, self.initialization_options())


def create_mcp_server(registry: ToolRegistry, name: str = DEFAULT_SERVER_NAME) -> MCPServer:
    return MCPServer(name, registry)
