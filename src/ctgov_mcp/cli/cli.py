"""Command-line interface for the ClinicalTrials.gov MCP server."""

import asyncio
import json
import logging
import sys

import click

from ctgov_mcp import __version__
from ctgov_mcp.config import get_settings, validate_config
from ctgov_mcp.exceptions import ConfigurationError
from ctgov_mcp.tools import build_tool_registry, get_tool_definitions

logger = logging.getLogger("ctgov_mcp")


def configure_logging(level: int) -> None:
    # stdout carries the stdio protocol stream, so logs go to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group(invoke_without_command=True)
@click.version_option(package_name="ctgov-mcp")
@click.pass_context
def main(ctx: click.Context):
    """ClinicalTrials.gov MCP server: search, suggest and fetch studies."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@main.command()
def serve():
    """Start the MCP server on the transport selected by USE_SSE / USE_HTTP."""
    settings = get_settings()
    configure_logging(settings.logging_level)

    try:
        validate_config(settings)
    except ConfigurationError as e:
        for error in e.errors:
            logger.error("Configuration error: %s", error)
        sys.exit(1)

    logger.info(
        "Starting %s v%s (environment=%s, transport=%s, legacy_tools=%s)",
        settings.server_name,
        __version__,
        settings.environment,
        settings.transport,
        settings.enable_legacy_tools,
    )
    if settings.transport != "stdio":
        logger.info(
            "Listening on http://%s:%d%s", settings.host, settings.port, settings.sse_path
        )

    if settings.transport == "sse":
        from ctgov_mcp.transports.sse import run_sse

        run_sse(settings)
    elif settings.transport == "http":
        from ctgov_mcp.transports.http import run_http

        run_http(settings)
    else:
        from ctgov_mcp.transports.stdio import run_stdio

        asyncio.run(run_stdio(settings))


@main.command()
@click.option(
    "--legacy/--no-legacy",
    default=None,
    help="Include legacy tools (defaults to ENABLE_LEGACY_TOOLS)",
)
def tools(legacy: bool | None):
    """Print the tool definitions as JSON."""
    settings = get_settings()
    if legacy is not None:
        settings = settings.model_copy(update={"enable_legacy_tools": legacy})

    definitions = get_tool_definitions(build_tool_registry(settings))
    click.echo(json.dumps([d.model_dump() for d in definitions], indent=2))


if __name__ == "__main__":
    main()
