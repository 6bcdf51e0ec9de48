"""
MCP Server Module

This module exposes the memory handlers to agent clients over the Model Context
Protocol (streamable HTTP transport). It registers the remember, forget and recall
tools plus a recall resource, and resolves the caller identity from the HTTP
headers of each request.
"""

from typing import Annotated, Any, Mapping

from mcp.server.fastmcp import Context, FastMCP
from pydantic import Field

from memory_server import handlers
from memory_server.memory.identity import resolve_identity
from memory_server.memory.memory_store import MemoryStore
from memory_server.utils.logger import setup_logger
from memory_server.utils.config import Config

# Initialize logger
logger = setup_logger(__name__)

RECALL_URI = "resource://memory.recall"

REMEMBER_DESCRIPTION = (
    "Store a memory item about a user's preferences, history, and key details "
    "across multiple sessions."
)
FORGET_DESCRIPTION = (
    "Remove a memory item by its index. This tool must be run one at a time "
    "as memory indexes change after each removal."
)
RECALL_DESCRIPTION = "Recall all stored memory items for the user."


def request_headers(ctx: Any) -> Mapping[str, str]:
    """
    Return the HTTP headers of the request being served.

    Calls made outside of an HTTP request (direct calls, stdio transport) have
    no headers and are treated as guests.
    """
    try:
        request = ctx.request_context.request
    except (AttributeError, ValueError):
        return {}
    if request is None:
        return {}
    return getattr(request, "headers", None) or {}


def build_mcp_server(store: MemoryStore, config: Config) -> FastMCP:
    """
    Create the MCP server bound to a memory store.

    Args:
        store: The memory store the tools operate on
        config: Application configuration

    Returns:
        FastMCP: Server whose streamable HTTP app serves at /mcp
    """
    mcp = FastMCP(
        config.app_name,
        host=config.host,
        port=config.port,
        stateless_http=True,
        streamable_http_path="/mcp",
    )

    def caller(ctx: Any):
        return resolve_identity(request_headers(ctx), config.identity_header)

    @mcp.tool(name="memory.remember", title="Remember Tool", description=REMEMBER_DESCRIPTION)
    async def remember(
        record: Annotated[
            str,
            Field(description="Details of the memory item to store such as user's preferences, history, and key details."),
        ],
        ctx: Context,
    ) -> str:
        return await handlers.remember(store, caller(ctx), record)

    @mcp.tool(name="memory.forget", title="Forget Tool", description=FORGET_DESCRIPTION)
    async def forget(
        index: Annotated[int, Field(description="Index of the memory item to remove.")],
        ctx: Context,
    ) -> str:
        return await handlers.forget(store, caller(ctx), index)

    @mcp.tool(name="memory.recall", title="Recall Tool", description=RECALL_DESCRIPTION)
    async def recall(ctx: Context) -> str:
        return await handlers.recall(store, caller(ctx))

    @mcp.resource(
        RECALL_URI,
        name="memory.recall",
        title="Recall Resource",
        description=RECALL_DESCRIPTION,
        mime_type="application/json",
    )
    async def recall_resource() -> str:
        return await handlers.recall(store, caller(mcp.get_context()))

    logger.info(f"MCP server '{config.app_name}' built with memory tools")
    return mcp
