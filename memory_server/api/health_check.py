"""
Health Check API Module

This module provides a health check endpoint to verify that the memory server
is running and that its document store answers.
"""

import time
from typing import Dict, Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from memory_server import __version__
from memory_server.api.dependencies import get_config, get_memory_store
from memory_server.memory.memory_store import MemoryStore
from memory_server.utils.logger import setup_logger
from memory_server.utils.config import Config

# Initialize logger
logger = setup_logger(__name__)

# Create router
router = APIRouter(tags=["health"])

# Models
class HealthResponse(BaseModel):
    """Response model for health check endpoint."""
    status: str
    version: str
    uptime: float
    components: Dict[str, Dict[str, Any]]

# Global variables
start_time = time.time()

@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    config: Config = Depends(get_config),
    memory_store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    """
    Health check endpoint to verify the service is running correctly.

    Returns:
        JSON response with health status information
    """
    uptime = time.time() - start_time

    store_ok = await memory_store.ping()
    components = {
        "document_store": {
            "status": "healthy" if store_ok else "unhealthy",
            "type": config.backend_type,
        }
    }

    logger.debug(f"Health check requested from {request.client.host if request.client else 'unknown'}")

    return {
        "status": "healthy" if store_ok else "degraded",
        "version": __version__,
        "uptime": uptime,
        "components": components,
    }

@router.get("/ping")
async def ping() -> Dict[str, str]:
    """
    Simple ping endpoint for basic connectivity checks.

    Returns:
        JSON response with pong message
    """
    return {"ping": "pong"}
