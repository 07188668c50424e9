"""
Legacy HTTP+SSE transport.

Clients open an event stream with ``GET {SSE_PATH}`` and post JSON-RPC
messages to ``{SSE_PATH}/messages/?session_id=...``.
"""

import contextlib
import logging
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request, Response
from mcp.server.sse import SseServerTransport

from ctgov_mcp.api.app import create_app
from ctgov_mcp.config import Settings
from ctgov_mcp.server import build_server

logger = logging.getLogger(__name__)


def messages_path(settings: Settings) -> str:
    return f"{settings.sse_path.rstrip('/')}/messages/"


def create_sse_app(settings: Settings) -> FastAPI:
    server, client = build_server(settings)
    sse = SseServerTransport(messages_path(settings))

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("SSE transport listening on %s", settings.sse_path)
        try:
            yield
        finally:
            await client.close()

    app = create_app(settings, lifespan=lifespan)

    @app.get(settings.sse_path)
    async def handle_sse(request: Request) -> Response:
        async with sse.connect_sse(
            request.scope, request.receive, request._send
        ) as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
        return Response()

    app.mount(messages_path(settings), app=sse.handle_post_message)
    return app


def run_sse(settings: Settings) -> None:
    app = create_sse_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.logging_level)
