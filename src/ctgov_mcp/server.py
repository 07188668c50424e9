"""
MCP server wiring.

Builds a low-level ``mcp`` Server whose ListTools / CallTool handlers read
from the tool registry. Errors raised by a tool handler propagate to the SDK,
which reports them to the client as a tool error (``isError: true``).
"""

import logging
from collections.abc import Mapping
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server

from ctgov_mcp import __version__
from ctgov_mcp.config import Settings
from ctgov_mcp.data_sources.base_client import ClientConfig
from ctgov_mcp.data_sources.clinical_trials import ClinicalTrialsGovClient
from ctgov_mcp.services.dispatcher import StudiesDispatcher
from ctgov_mcp.tools import (
    ToolDefinition,
    ToolRegistry,
    build_tool_registry,
    get_tool_definitions,
    get_tool_handler,
)

logger = logging.getLogger(__name__)


def to_mcp_tool(definition: ToolDefinition) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.input_schema,
    )


def list_tools(registry: ToolRegistry) -> list[types.Tool]:
    return [to_mcp_tool(d) for d in get_tool_definitions(registry)]


async def call_tool(
    registry: ToolRegistry,
    dispatcher: StudiesDispatcher,
    name: str,
    arguments: Mapping[str, Any] | None,
) -> list[types.TextContent]:
    """Run one tool call. Raises UnknownToolError for names not in the registry."""
    handler = get_tool_handler(registry, name)
    logger.info("CallTool %s", name)
    logger.debug("CallTool %s arguments=%s", name, dict(arguments or {}))
    text = await handler(dispatcher, arguments)
    return [types.TextContent(type="text", text=text)]


def create_server(
    settings: Settings, registry: ToolRegistry, dispatcher: StudiesDispatcher
) -> Server:
    server: Server = Server(settings.server_name, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_tools(registry)

    # Arguments are validated by the request models, which name the bad field.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        try:
            return await call_tool(registry, dispatcher, name, arguments)
        except Exception:
            logger.warning("Tool %s failed", name, exc_info=True)
            raise

    return server


def build_server(settings: Settings) -> tuple[Server, ClinicalTrialsGovClient]:
    """Server plus the client it owns; the caller closes the client on shutdown."""
    client = ClinicalTrialsGovClient(ClientConfig.from_settings(settings))
    registry = build_tool_registry(settings)
    logger.info("Registered tools: %s", ", ".join(registry))
    return create_server(settings, registry, StudiesDispatcher(client)), client
