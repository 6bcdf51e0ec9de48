"""
Forget API Module

This module provides the API endpoint for removing one memory item by its index.
Indexes shift after every removal, so items must be removed one at a time.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path

from memory_server import handlers
from memory_server.api.dependencies import get_identity, get_memory_store
from memory_server.api.remember import MemoryTextResponse
from memory_server.memory.memory_store import MemoryStore

# Create router
router = APIRouter(tags=["memory"])

@router.delete("/memory/{index}", response_model=MemoryTextResponse)
async def forget(
    index: int = Path(..., description="Index of the memory item to remove."),
    identity: Optional[str] = Depends(get_identity),
    memory_store: MemoryStore = Depends(get_memory_store),
) -> MemoryTextResponse:
    """Remove the memory item at index for the caller."""
    text = await handlers.forget(memory_store, identity, index)
    return MemoryTextResponse(text=text)
