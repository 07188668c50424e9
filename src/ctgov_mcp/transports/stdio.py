"""stdio transport: MCP over the process's stdin/stdout."""

import logging

from mcp.server.stdio import stdio_server

from ctgov_mcp.config import Settings
from ctgov_mcp.server import build_server

logger = logging.getLogger(__name__)


async def run_stdio(settings: Settings) -> None:
    server, client = build_server(settings)
    logger.info("Serving %s over stdio", settings.server_name)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await client.close()
        logger.info("stdio transport closed")
