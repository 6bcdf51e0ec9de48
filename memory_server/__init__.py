"""
Memory server.

A per-user memory log for agent clients, served over MCP and REST and backed by
a JSON-document store.
"""

__version__ = "0.1.0"
