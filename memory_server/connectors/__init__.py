"""
Memory Server Connectors Package

This package provides protocol connectors that expose the memory handlers to
agent platforms. The MCP connector serves the remember, forget and recall
operations to Model Context Protocol clients.
"""

from memory_server.connectors.mcp_connector import RECALL_URI, build_mcp_server, request_headers

__all__ = ["RECALL_URI", "build_mcp_server", "request_headers"]
