"""FastAPI application hosting the networked MCP transports."""
