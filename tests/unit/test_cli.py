"""Unit tests for the command-line interface."""

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from ctgov_mcp.cli.cli import main
from ctgov_mcp.config import Settings


class TestToolsCommand:
    """Tests for `ctgov-mcp tools`."""

    def test_prints_definitions(self):
        with patch("ctgov_mcp.cli.cli.get_settings", return_value=Settings()):
            result = CliRunner().invoke(main, ["tools", "--no-legacy"])

        assert result.exit_code == 0
        names = [d["name"] for d in json.loads(result.output)]
        assert names == ["ct_gov_studies"]

    def test_legacy_flag(self):
        with patch("ctgov_mcp.cli.cli.get_settings", return_value=Settings()):
            result = CliRunner().invoke(main, ["tools", "--legacy"])

        names = {d["name"] for d in json.loads(result.output)}
        assert "ct_gov_search_studies" in names


class TestServeCommand:
    """Tests for `ctgov-mcp serve`."""

    def test_invalid_config_exits_1(self):
        with patch("ctgov_mcp.cli.cli.get_settings", return_value=Settings(port=0)):
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 1

    def test_stdio_is_default_transport(self):
        run_stdio = AsyncMock()
        with patch("ctgov_mcp.cli.cli.get_settings", return_value=Settings()), patch(
            "ctgov_mcp.transports.stdio.run_stdio", run_stdio
        ):
            result = CliRunner().invoke(main, [])

        assert result.exit_code == 0
        run_stdio.assert_awaited_once()

    def test_http_transport(self):
        with patch(
            "ctgov_mcp.cli.cli.get_settings", return_value=Settings(use_http=True)
        ), patch("ctgov_mcp.transports.http.run_http") as run_http:
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 0
        run_http.assert_called_once()

    def test_sse_transport(self):
        with patch(
            "ctgov_mcp.cli.cli.get_settings", return_value=Settings(use_sse=True)
        ), patch("ctgov_mcp.transports.sse.run_sse") as run_sse:
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 0
        run_sse.assert_called_once()

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "version" in result.output
