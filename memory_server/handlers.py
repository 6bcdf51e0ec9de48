"""
Request handlers shared by the MCP server and the REST API.

Each handler takes the already-resolved caller identity, short-circuits guests
without touching the store, and renders the store result as the text payload
returned to the client. Handlers never raise.
"""

import json
from typing import Optional

from memory_server.memory.identity import derive_key
from memory_server.memory.memory_store import MemoryStore, StoreStatus
from memory_server.utils.logger import setup_logger

# Initialize logger
logger = setup_logger(__name__)

GUEST_MESSAGE = "Memory feature is not available for guest users."
GUEST_RECALL_ERROR = "User not found"


def _key_for(store: MemoryStore, identity: str) -> str:
    return derive_key(identity, store.config.key_namespace)


async def remember(store: MemoryStore, identity: Optional[str], record: str) -> str:
    """Store a memory item for the caller."""
    if not identity:
        logger.debug("remember called by guest")
        return GUEST_MESSAGE

    result = await store.append(_key_for(store, identity), record)
    if result.status == StoreStatus.STORE_ERROR:
        return f"Error storing memory item: {result.error}"

    return f"Stored memory about: {record} on {result.timestamp}"


async def forget(store: MemoryStore, identity: Optional[str], index: int) -> str:
    """Remove the caller's memory item at index."""
    if not identity:
        logger.debug("forget called by guest")
        return GUEST_MESSAGE

    result = await store.remove_at(_key_for(store, identity), index)
    if result.status == StoreStatus.STORE_ERROR:
        return f"Error removing memory item {index}: {result.error}"
    if result.status == StoreStatus.NOT_FOUND:
        return f"No memory item found at index {index}."

    return f"Removed memory item at index {index} about: {result.value}"


async def recall(store: MemoryStore, identity: Optional[str]) -> str:
    """Return the caller's memory items as JSON text."""
    if not identity:
        logger.debug("recall called by guest")
        return json.dumps({"error": GUEST_RECALL_ERROR})

    result = await store.recall(_key_for(store, identity))
    if result.status == StoreStatus.STORE_ERROR:
        return json.dumps({"error": result.error})

    return json.dumps(result.value)
