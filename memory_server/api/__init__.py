"""
Memory server API package.

This package contains the REST API endpoints for the memory server. It provides
interfaces for remembering, forgetting and recalling memory items, as well as
health check functionality.
"""

# Import API endpoints to make them available
from memory_server.api.remember import router as remember_router
from memory_server.api.forget import router as forget_router
from memory_server.api.recall import router as recall_router
from memory_server.api.health_check import router as health_check_router

# List of all routers to be included in the application
routers = [
    remember_router,
    forget_router,
    recall_router,
    health_check_router,
]

__all__ = [
    "remember_router",
    "forget_router",
    "recall_router",
    "health_check_router",
    "routers"
]
