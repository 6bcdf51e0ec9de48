"""
MCP Connector Package

This package exposes the memory server to agent clients over the Model Context
Protocol.

The main components are:
- build_mcp_server: FastMCP server with the memory tools and recall resource
- request_headers: HTTP header access for identity resolution
"""

from memory_server.connectors.mcp_connector.server import (
    RECALL_URI,
    build_mcp_server,
    request_headers,
)

__all__ = ["RECALL_URI", "build_mcp_server", "request_headers"]
