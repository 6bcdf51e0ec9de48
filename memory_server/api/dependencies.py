"""
Shared dependencies for the REST API routers.

The application keeps a single configuration and memory store on app.state;
these dependencies hand them to the endpoints.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request

from memory_server.memory.identity import resolve_identity
from memory_server.memory.memory_store import MemoryStore
from memory_server.utils.config import Config


def get_config(request: Request) -> Config:
    """Dependency to get configuration."""
    return request.app.state.config


def get_memory_store(request: Request) -> MemoryStore:
    """Dependency to get the memory store."""
    store = getattr(request.app.state, "memory_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Memory store not initialized")
    return store


def get_identity(request: Request, config: Config = Depends(get_config)) -> Optional[str]:
    """Dependency to resolve the caller identity from the request headers."""
    return resolve_identity(request.headers, config.identity_header)
