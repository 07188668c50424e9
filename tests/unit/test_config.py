"""Unit tests for configuration loading and validation."""

import logging

import pytest

from ctgov_mcp.config import Settings, validate_config
from ctgov_mcp.exceptions import ConfigurationError


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("USE_HTTP", "USE_SSE", "ENABLE_LEGACY_TOOLS", "PORT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.transport == "stdio"
        assert settings.port == 3000
        assert settings.sse_path == "/mcp"
        assert settings.enable_legacy_tools is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("USE_HTTP", "true")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("ENABLE_LEGACY_TOOLS", "1")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        settings = Settings(_env_file=None)
        assert settings.transport == "http"
        assert settings.port == 8080
        assert settings.enable_legacy_tools is True
        assert settings.cors_origin_list == ["https://a.example", "https://b.example"]

    def test_sse_wins_over_http(self):
        assert Settings(use_http=True, use_sse=True).transport == "sse"

    @pytest.mark.parametrize(
        "level,expected",
        [("debug", logging.DEBUG), ("WARN", logging.WARNING), ("error", logging.ERROR), ("bogus", logging.INFO)],
    )
    def test_logging_level(self, level, expected):
        assert Settings(log_level=level).logging_level == expected


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self):
        validate_config(Settings(environment="development"))

    def test_collects_all_errors(self):
        settings = Settings(server_name="", port=70000, request_timeout=-1, cors_origins=" , ")
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config(settings)
        errors = exc_info.value.errors
        assert "Server name is required" in errors
        assert "Invalid port: 70000. Must be between 1 and 65535." in errors
        assert any("request timeout" in e for e in errors)
        assert "At least one CORS origin must be specified" in errors

    def test_soft_problems_only_warn(self, caplog):
        settings = Settings(environment="staging", log_level="loud", use_http=True)
        with caplog.at_level(logging.WARNING, logger="ctgov_mcp.config"):
            validate_config(settings)
        assert "Unknown ENVIRONMENT: staging" in caplog.text
        assert "Unknown LOG_LEVEL: loud" in caplog.text
