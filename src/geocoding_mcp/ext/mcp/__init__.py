"""MCP integration: schema bridge and stdio server."""

from .bridge import get_tool_schema
from .server import DEFAULT_SERVER_NAME, MCPServer, ToolServer, create_mcp_server

__all__ = [
    "ToolServer", "MCPServer", "create_mcp_server", "DEFAULT_SERVER_NAME",
    "get_tool_schema",
]
