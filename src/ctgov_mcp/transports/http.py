"""Streamable HTTP transport, mounted on the FastAPI app at ``SSE_PATH``."""

import contextlib
import logging
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from ctgov_mcp.api.app import create_app
from ctgov_mcp.config import Settings
from ctgov_mcp.server import build_server

logger = logging.getLogger(__name__)


def create_http_app(settings: Settings) -> FastAPI:
    server, client = build_server(settings)
    # Each request is independent; no session state is kept between calls.
    session_manager = StreamableHTTPSessionManager(app=server, stateless=True)

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info(
                "Streamable HTTP transport listening on %s", settings.sse_path
            )
            try:
                yield
            finally:
                await client.close()

    app = create_app(settings, lifespan=lifespan)
    app.mount(settings.sse_path, handle_mcp)
    return app


def run_http(settings: Settings) -> None:
    app = create_http_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.logging_level)
