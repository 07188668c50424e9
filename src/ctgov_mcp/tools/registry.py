"""
Tool Definition Registry.

A static mapping from tool name to (definition, handler). The registry is
built once at server start and only read afterwards.
"""

from ctgov_mcp.config import Settings, get_settings
from ctgov_mcp.exceptions import UnknownToolError
from ctgov_mcp.tools import ct_gov_studies, legacy
from ctgov_mcp.tools.base import RegisteredTool, ToolDefinition, ToolHandler

ToolRegistry = dict[str, RegisteredTool]


def build_tool_registry(settings: Settings | None = None) -> ToolRegistry:
    """Unified tool always; the three legacy tools when enabled in settings."""
    settings = settings or get_settings()
    tools = [ct_gov_studies.TOOL]
    if settings.enable_legacy_tools:
        tools += legacy.TOOLS
    return {tool.definition.name: tool for tool in tools}


def get_tool_definitions(registry: ToolRegistry) -> list[ToolDefinition]:
    return [tool.definition for tool in registry.values()]


def get_tool_handler(registry: ToolRegistry, name: str) -> ToolHandler:
    try:
        return registry[name].handler
    except KeyError:
        raise UnknownToolError(name) from None
