"""MCP server for uploaded reports."""

from reportpack.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
