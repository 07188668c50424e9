"""MCP tools exposed by the server."""

from ctgov_mcp.tools.base import RegisteredTool, ToolDefinition, ToolExample
from ctgov_mcp.tools.registry import (
    ToolRegistry,
    build_tool_registry,
    get_tool_definitions,
    get_tool_handler,
)

__all__ = [
    "RegisteredTool",
    "ToolDefinition",
    "ToolExample",
    "ToolRegistry",
    "build_tool_registry",
    "get_tool_definitions",
    "get_tool_handler",
]
