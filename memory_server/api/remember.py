"""
Remember API Module

This module provides the API endpoint for storing a memory item about the caller.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, StrictStr

from memory_server import handlers
from memory_server.api.dependencies import get_identity, get_memory_store
from memory_server.memory.memory_store import MemoryStore

# Create router
router = APIRouter(tags=["memory"])

# Models
class RememberRequest(BaseModel):
    """Request model for storing a memory item."""
    record: StrictStr = Field(
        ...,
        description="Details of the memory item to store such as user's preferences, history, and key details.",
    )

class MemoryTextResponse(BaseModel):
    """Response model carrying the human-readable outcome."""
    text: str

@router.post("/memory", response_model=MemoryTextResponse)
async def remember(
    request: RememberRequest,
    identity: Optional[str] = Depends(get_identity),
    memory_store: MemoryStore = Depends(get_memory_store),
) -> MemoryTextResponse:
    """
    Store a memory item about a user's preferences, history, and key details.

    Guests get a fixed message and nothing is stored. Store failures are
    reported in the text, never as an HTTP error.
    """
    text = await handlers.remember(memory_store, identity, request.record)
    return MemoryTextResponse(text=text)
