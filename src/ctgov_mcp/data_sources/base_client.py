"""
Base client for outbound HTTP to external data sources.

Provides: aiohttp session management, an optional total timeout, structured
request logging, and translation of transport failures into NetworkError.
Each call issues exactly one GET. Nothing is cached or retried, and redirects
are surfaced to the caller instead of being followed.
"""

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel

from ctgov_mcp.config import Settings
from ctgov_mcp.constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ctgov_mcp.exceptions import ApiRequestError, NetworkError

logger = logging.getLogger("ctgov_mcp.data_sources")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ClientConfig(BaseModel):
    """Outbound HTTP settings."""

    timeout_seconds: float = DEFAULT_TIMEOUT  # 0 disables the timeout
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientConfig":
        return cls(
            timeout_seconds=settings.request_timeout,
            user_agent=settings.user_agent,
        )


# ---------------------------------------------------------------------------
# Request context / response (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "clinical_trials"
    method: str  # e.g. "search_studies"


class HttpResponse(BaseModel):
    """A fully read response; the connection is already released."""

    url: str
    status: int
    reason: str = ""
    headers: dict[str, str] = {}  # keys lowercased
    body: str = ""
    content: bytes = b""
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def parse_json(self) -> Any:
        try:
            return json.loads(self.body)
        except json.JSONDecodeError as exc:
            raise ApiRequestError(
                f"Invalid JSON in response from {self.url}: {exc}",
                status_code=self.status,
                status_text=self.reason,
                url=self.url,
            ) from exc


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for data source clients.

    Subclasses implement `_source_name` and their own typed methods that call
    `_get()`. A session can be injected, in which case the caller owns it and
    `close()` leaves it open.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.config = config or ClientConfig()
        self._session = session
        self._owns_session = session is None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'clinical_trials'."""
        ...

    # -- Session management --------------------------------------------------

    def _timeout(self) -> aiohttp.ClientTimeout:
        if self.config.timeout_seconds > 0:
            return aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        return aiohttp.ClientTimeout(total=None)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout())
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request --------------------------------------------------------

    async def _get(
        self,
        url: str,
        *,
        accept: str | None = "application/json",
        context: RequestContext | None = None,
    ) -> HttpResponse:
        """
        Issue one GET and read the whole body.

        Parameters
        ----------
        url : str
            Fully assembled URL, query string included.
        accept : str, optional
            Value of the Accept header; None sends no Accept header.
        context : RequestContext, optional
            Logging context.

        Raises
        ------
        NetworkError
            No HTTP response was obtained (DNS, refused connection, timeout).
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")
        headers = {"User-Agent": self.config.user_agent}
        if accept:
            headers["Accept"] = accept

        session = await self._get_session()
        logger.info("Request [%s.%s] url=%s", ctx.source, ctx.method, url)
        start = time.monotonic()

        try:
            async with session.get(
                url, headers=headers, allow_redirects=False
            ) as resp:
                content = await resp.read()
                status = resp.status
                reason = resp.reason or ""
                resp_headers = {k.lower(): v for k, v in resp.headers.items()}
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Timeout [%s.%s] after %.1fs url=%s",
                ctx.source,
                ctx.method,
                self.config.timeout_seconds,
                url,
            )
            raise NetworkError(
                f"Request timed out after {self.config.timeout_seconds:g}s", url=url
            ) from exc
        except aiohttp.ClientError as exc:
            logger.warning(
                "Connection failure [%s.%s]: %s", ctx.source, ctx.method, exc
            )
            raise NetworkError(f"Network error: {exc}", url=url) from exc

        elapsed = time.monotonic() - start
        # json.zip bodies are binary; `content` keeps the raw bytes.
        body = content.decode("utf-8", errors="replace")
        response = HttpResponse(
            url=url,
            status=status,
            reason=reason,
            headers=resp_headers,
            body=body,
            content=content,
            elapsed_seconds=elapsed,
        )

        if response.ok:
            logger.info(
                "Success [%s.%s] elapsed=%.2fs", ctx.source, ctx.method, elapsed
            )
        else:
            logger.warning(
                "HTTP %d from %s.%s: %s",
                response.status,
                ctx.source,
                ctx.method,
                body[:200],
            )
        return response
