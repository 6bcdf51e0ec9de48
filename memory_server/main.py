"""
Memory Server: Main Application Entry Point

This module builds the FastAPI application. It serves the memory tools to agent
clients over MCP (served at /mcp) and the same operations as a REST API, both
backed by one memory store.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from memory_server import __version__
from memory_server.api import routers
from memory_server.connectors.mcp_connector import build_mcp_server
from memory_server.memory.memory_store import MemoryStore
from memory_server.utils.config import Config, load_config
from memory_server.utils.logger import apply_log_level, setup_logger

# Initialize logger
logger = setup_logger(__name__)


def create_app(config: Optional[Config] = None, store: Optional[MemoryStore] = None) -> FastAPI:
    """
    Create the memory server application.

    Args:
        config: Configuration, loaded from the environment when omitted
        store: Memory store, built from the configuration when omitted

    Returns:
        FastAPI: The application, with the MCP endpoint served at /mcp
    """
    config = config or load_config()
    apply_log_level(config.log_level)
    store = store or MemoryStore(config)

    mcp_server = build_mcp_server(store, config)
    # Creating the app also creates the session manager run in the lifespan
    mcp_app = mcp_server.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await store.initialize()
        except Exception as e:
            logger.error(f"Failed to start application: {e}")
            raise

        try:
            async with mcp_server.session_manager.run():
                logger.info("Application started successfully")
                yield
        finally:
            await store.close()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=config.app_name,
        description="Per-user memory log for agent clients",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id"],
    )

    app.state.config = config
    app.state.memory_store = store
    app.state.mcp_server = mcp_server

    for router in routers:
        app.include_router(router)

    # Mounted last at the root so /mcp is served without a trailing-slash redirect
    app.mount("/", mcp_app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("memory_server.main:app", host=app.state.config.host, port=app.state.config.port)
