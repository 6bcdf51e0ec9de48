"""
Memory Store Module

This module maintains, per user, an ordered list of free-text memory items on top
of a JSON-document backend. The list lives as a single JSON array at the user's
storage key and supports append, remove-at-index and full retrieval.

Every operation returns a StoreResult instead of raising: backend failures are
caught at the operation boundary and reported as STORE_ERROR.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from memory_server.memory.backends import (
    ROOT_PATH,
    DocumentBackend,
    InMemoryDocumentBackend,
    RedisDocumentBackend,
)
from memory_server.utils.logger import setup_logger
from memory_server.utils.config import BackendType, Config

# Initialize logger
logger = setup_logger(__name__)


class StoreStatus(str, Enum):
    """Outcome of a memory store operation."""
    OK = "ok"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


class StoreResult(BaseModel):
    """Result of a memory store operation."""
    status: StoreStatus
    value: Any = None
    error: Optional[str] = None
    timestamp: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == StoreStatus.OK

    @classmethod
    def success(cls, value: Any = None, timestamp: Optional[str] = None) -> "StoreResult":
        return cls(status=StoreStatus.OK, value=value, timestamp=timestamp)

    @classmethod
    def not_found(cls) -> "StoreResult":
        return cls(status=StoreStatus.NOT_FOUND)

    @classmethod
    def failure(cls, error: Exception) -> "StoreResult":
        return cls(status=StoreStatus.STORE_ERROR, error=str(error) or error.__class__.__name__)


def create_backend(config: Config) -> DocumentBackend:
    """Choose the document backend based on configuration."""
    backend_type = str(config.backend_type).lower()

    # Config validation restricts backend_type to the BackendType members
    if backend_type == BackendType.REDIS.value:
        return RedisDocumentBackend(config)
    return InMemoryDocumentBackend(config)


class MemoryStore:
    """
    Per-user memory lists on a document backend.

    Keys are passed in already derived (see memory_server.memory.identity); the
    store never resolves identities itself.
    """

    def __init__(self, config: Config, backend: Optional[DocumentBackend] = None):
        """Initialize the memory store."""
        self.config = config
        self.backend = backend

    async def __aenter__(self):
        """Context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        await self.close()

    async def initialize(self) -> None:
        """Create the configured backend if none was given and open it."""
        if self.backend is None:
            self.backend = create_backend(self.config)
        await self.backend.initialize()

    async def close(self) -> None:
        """Close the backend."""
        if self.backend:
            await self.backend.close()

    async def ping(self) -> bool:
        """Return True if the backend answers, False on any backend error."""
        try:
            return await self.backend.ping()
        except Exception as e:
            logger.error(f"Document backend ping failed: {e}")
            return False

    async def append(self, key: str, record: str) -> StoreResult:
        """
        Append a record to the end of the list at key, creating the list if absent.

        With atomic_append (the default) the list is created with a conditional
        write (set-if-absent) and only falls back to an append when the key
        already exists, so concurrent first appends for one user all land.

        Without it the store checks existence first and then appends or sets.
        Two concurrent first appends can then both see "absent" and the second
        set overwrites the first record.

        Returns:
            StoreResult carrying the record and the UTC capture time
        """
        try:
            if self.config.atomic_append:
                created = await self.backend.set_document(key, ROOT_PATH, [record], only_if_absent=True)
                if not created:
                    await self.backend.append_to_array(key, ROOT_PATH, record)
            elif await self.backend.exists(key):
                await self.backend.append_to_array(key, ROOT_PATH, record)
            else:
                await self.backend.set_document(key, ROOT_PATH, [record])
        except Exception as e:
            logger.error(f"Error appending memory item to {key}: {e}")
            return StoreResult.failure(e)

        timestamp = datetime.now(timezone.utc).isoformat()
        logger.info(f"Appended memory item to {key}")
        return StoreResult.success(record, timestamp=timestamp)

    async def remove_at(self, key: str, index: int) -> StoreResult:
        """
        Remove the item at index from the list at key.

        Indices are positions at the moment the removal executes; every removal
        shifts later items down by one. A missing key or an index outside the
        list is NOT_FOUND, not an error.
        """
        try:
            removed = await self.backend.remove_from_array(key, ROOT_PATH, index)
        except Exception as e:
            logger.error(f"Error removing memory item {index} from {key}: {e}")
            return StoreResult.failure(e)

        if removed is None:
            logger.debug(f"No memory item at index {index} for {key}")
            return StoreResult.not_found()

        logger.info(f"Removed memory item {index} from {key}")
        return StoreResult.success(removed)

    async def recall(self, key: str) -> StoreResult:
        """Return every item at key in insertion order (empty if the key is absent)."""
        try:
            document = await self.backend.get_document(key, ROOT_PATH)
        except Exception as e:
            logger.error(f"Error reading memory items for {key}: {e}")
            return StoreResult.failure(e)

        return StoreResult.success(self._unwrap(document))

    @staticmethod
    def _unwrap(document: Any) -> List[str]:
        # Root JSONPath reads come back wrapped in a list of matches
        if not document:
            return []
        items = document[0]
        return list(items) if items is not None else []
