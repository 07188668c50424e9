"""Unit tests for MCP server wiring."""

from importlib.metadata import version
from unittest.mock import AsyncMock

import mcp.types as types
from mcp.server.lowlevel import Server
import pytest

from ctgov_mcp import __version__
from ctgov_mcp.config import Settings
from ctgov_mcp.data_sources.clinical_trials import ClinicalTrialsGovClient
from ctgov_mcp.exceptions import UnknownToolError
from ctgov_mcp.server import build_server, call_tool, list_tools
from ctgov_mcp.services.dispatcher import StudiesDispatcher
from ctgov_mcp.tools import build_tool_registry


class TestListTools:
    """Tests for list_tools."""

    def test_converts_definitions(self):
        tools = list_tools(build_tool_registry(Settings()))
        assert [t.name for t in tools] == ["ct_gov_studies"]
        assert isinstance(tools[0], types.Tool)
        assert tools[0].inputSchema["required"] == ["method"]


class TestCallTool:
    """Tests for call_tool."""

    async def test_returns_text_content(self):
        """The handler's markdown comes back as a single text block."""
        dispatcher = AsyncMock()
        dispatcher.dispatch = AsyncMock(return_value="# Clinical Trials Search Results")

        content = await call_tool(
            build_tool_registry(Settings()),
            dispatcher,
            "ct_gov_studies",
            {"method": "search", "condition": "asthma"},
        )

        assert content == [types.TextContent(type="text", text="# Clinical Trials Search Results")]
        dispatcher.dispatch.assert_awaited_once_with({"method": "search", "condition": "asthma"})

    async def test_unknown_tool_raises(self):
        with pytest.raises(UnknownToolError):
            await call_tool(build_tool_registry(Settings()), AsyncMock(), "nope", {})

    async def test_end_to_end_with_fake_session(self, make_response, make_session, search_payload):
        session = make_session(make_response(200, search_payload))
        dispatcher = StudiesDispatcher(ClinicalTrialsGovClient(session=session))

        (content,) = await call_tool(
            build_tool_registry(Settings()),
            dispatcher,
            "ct_gov_studies",
            {"method": "search", "condition": "Diabetes", "pageSize": 5},
        )

        assert "1 of 100 studies found" in content.text


class TestBuildServer:
    """Tests for build_server."""

    async def test_server_identity(self):
        server, client = build_server(Settings(server_name="ctgov-test"))
        try:
            assert server.name == "ctgov-test"
            assert server.version == __version__
            assert isinstance(client, ClinicalTrialsGovClient)
        finally:
            await client.close()

    async def test_request_handlers_registered(self):
        server, client = build_server(Settings())
        try:
            assert types.ListToolsRequest in server.request_handlers
            assert types.CallToolRequest in server.request_handlers
        finally:
            await client.close()

    def test_installed_sdk_has_low_level_decorators(self):
        """The server is written against the 1.x low-level Server API."""
        assert version("mcp").split(".")[0] == "1"
        assert hasattr(Server("x"), "list_tools")
        assert hasattr(Server("x"), "call_tool")
