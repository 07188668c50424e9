"""MCP transport adapters: stdio, streamable HTTP and SSE."""
