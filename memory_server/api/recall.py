"""
Recall API Module

This module provides the API endpoint for listing every memory item stored for
the caller, in insertion order, as a JSON array.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from memory_server import handlers
from memory_server.api.dependencies import get_identity, get_memory_store
from memory_server.memory.memory_store import MemoryStore

# Create router
router = APIRouter(tags=["memory"])

@router.get("/memory")
async def recall(
    identity: Optional[str] = Depends(get_identity),
    memory_store: MemoryStore = Depends(get_memory_store),
) -> Response:
    """
    Recall all stored memory items for the caller.

    The body is the JSON text produced by the recall handler: the list itself,
    or an {"error": ...} object for guests and store failures.
    """
    text = await handlers.recall(memory_store, identity)
    return Response(content=text, media_type="application/json")
