"""Unit tests for the FastAPI app and the networked transports."""

from fastapi.testclient import TestClient

from ctgov_mcp import __version__
from ctgov_mcp.api.app import create_app
from ctgov_mcp.config import Settings
from ctgov_mcp.transports.http import create_http_app
from ctgov_mcp.transports.sse import create_sse_app, messages_path


class TestHealth:
    """Tests for /health."""

    def test_health(self):
        client = TestClient(create_app(Settings()))
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_cors_headers(self):
        app = create_app(Settings(cors_origins="https://a.example"))
        response = TestClient(app).get("/health", headers={"Origin": "https://a.example"})
        assert response.headers["access-control-allow-origin"] == "https://a.example"


class TestTransportApps:
    """Tests for the HTTP and SSE app factories."""

    def test_http_app_serves_health(self):
        with TestClient(create_http_app(Settings(use_http=True))) as client:
            assert client.get("/health").json()["status"] == "healthy"

    def test_http_app_mounts_mcp_path(self):
        app = create_http_app(Settings(use_http=True, sse_path="/mcp"))
        assert any(getattr(route, "path", None) == "/mcp" for route in app.routes)

    def test_sse_routes(self):
        settings = Settings(use_sse=True, sse_path="/mcp")
        app = create_sse_app(settings)
        paths = {getattr(route, "path", None) for route in app.routes}
        assert "/mcp" in paths
        assert messages_path(settings).rstrip("/") in paths
