"""
Document Store Backends

This module provides the JSON-document primitives the memory store is built on.
Redis with the RedisJSON module is the production backend; a process-local
backend with the same semantics is available for development and tests.
"""

import asyncio
import copy
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import redis.asyncio as aioredis

from memory_server.utils.logger import setup_logger
from memory_server.utils.config import Config

# Initialize logger
logger = setup_logger(__name__)

ROOT_PATH = "$"

# Bounds check and pop run as one script so a stale index can never pop a
# clamped element (JSON.ARRPOP rounds out-of-range indexes to the array ends).
REMOVE_AT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
local index = tonumber(ARGV[2])
local length = redis.call('JSON.ARRLEN', KEYS[1], ARGV[1])
if type(length) == 'table' then
    length = length[1]
end
if not length or index < 0 or index >= length then
    return false
end
local popped = redis.call('JSON.ARRPOP', KEYS[1], ARGV[1], index)
if type(popped) == 'table' then
    popped = popped[1]
end
return popped
"""


class DocumentStoreError(Exception):
    """Raised by the process-local backend where Redis would return an error reply."""


class DocumentBackend(ABC):
    """
    Abstract base class for JSON-document backends.

    Every primitive is a single call against the store and is atomic per key.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Open connections and prepare the backend."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the backend and clean up resources."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the backend is reachable."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return True if a document is stored at key."""
        pass

    @abstractmethod
    async def get_document(self, key: str, path: str = ROOT_PATH) -> Optional[Any]:
        """Return the list of values matching path, or None if the key is absent."""
        pass

    @abstractmethod
    async def set_document(
        self, key: str, path: str, value: Any, only_if_absent: bool = False
    ) -> bool:
        """Set the value at path. With only_if_absent, return False instead of overwriting."""
        pass

    @abstractmethod
    async def append_to_array(self, key: str, path: str, value: Any) -> int:
        """Append value to the array at path and return the new length."""
        pass

    @abstractmethod
    async def remove_from_array(self, key: str, path: str, index: int) -> Optional[Any]:
        """Remove and return the element at index, or None if the key or index is absent."""
        pass


class RedisDocumentBackend(DocumentBackend):
    """
    Redis implementation of the document backend.

    Requires a server with the RedisJSON module (Redis Stack, Redis 8, Upstash).
    """

    def __init__(self, config: Config, client: Optional[aioredis.Redis] = None):
        """
        Initialize the Redis backend.

        Args:
            config: Application configuration (redis_url, redis_timeout)
            client: Already-built async client, used instead of connecting to redis_url
        """
        self.config = config
        self.url = config.redis_url
        self.client = client
        self._remove_at = None

    async def initialize(self) -> None:
        """Create the connection pool and register the removal script."""
        if self._remove_at is not None:
            return
        if self.client is None:
            self.client = aioredis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=self.config.redis_timeout,
                socket_connect_timeout=self.config.redis_timeout,
            )
        self._remove_at = self.client.register_script(REMOVE_AT_SCRIPT)
        logger.info(f"Redis document backend initialized for {self._redacted_url()}")

    async def close(self) -> None:
        """Close the connection pool."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            self._remove_at = None
            logger.info("Redis document backend closed")

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def exists(self, key: str) -> bool:
        return await self.client.exists(key) > 0

    async def get_document(self, key: str, path: str = ROOT_PATH) -> Optional[Any]:
        return await self.client.json().get(key, path)

    async def set_document(
        self, key: str, path: str, value: Any, only_if_absent: bool = False
    ) -> bool:
        # JSON.SET ... NX replies nil when the key already exists
        result = await self.client.json().set(key, path, value, nx=only_if_absent)
        return bool(result)

    async def append_to_array(self, key: str, path: str, value: Any) -> int:
        result = await self.client.json().arrappend(key, path, value)
        # JSONPath queries reply with one length per match
        if isinstance(result, list):
            return result[0] if result else 0
        return result

    async def remove_from_array(self, key: str, path: str, index: int) -> Optional[Any]:
        popped = await self._remove_at(keys=[key], args=[path, index])
        if popped is None:
            return None
        return json.loads(popped)

    def _redacted_url(self) -> str:
        # Keep credentials out of the logs
        if "@" in self.url:
            scheme, _, rest = self.url.partition("://")
            return f"{scheme}://***@{rest.split('@', 1)[1]}"
        return self.url


class InMemoryDocumentBackend(DocumentBackend):
    """
    Process-local implementation of the document backend.

    Documents live in a dict. Each primitive yields to the event loop once
    before touching state, the way a network round trip would.
    """

    def __init__(self, config: Optional[Config] = None):
        """Initialize the in-memory backend."""
        self.config = config
        self._documents: Dict[str, Any] = {}
        self.calls = 0

    async def initialize(self) -> None:
        logger.info("In-memory document backend initialized")

    async def close(self) -> None:
        logger.info("In-memory document backend closed")

    async def ping(self) -> bool:
        await self._round_trip()
        return True

    async def exists(self, key: str) -> bool:
        await self._round_trip()
        return key in self._documents

    async def get_document(self, key: str, path: str = ROOT_PATH) -> Optional[Any]:
        await self._round_trip()
        self._check_path(path)
        if key not in self._documents:
            return None
        return [copy.deepcopy(self._documents[key])]

    async def set_document(
        self, key: str, path: str, value: Any, only_if_absent: bool = False
    ) -> bool:
        await self._round_trip()
        self._check_path(path)
        if only_if_absent and key in self._documents:
            return False
        self._documents[key] = copy.deepcopy(value)
        return True

    async def append_to_array(self, key: str, path: str, value: Any) -> int:
        await self._round_trip()
        self._check_path(path)
        if key not in self._documents:
            raise DocumentStoreError(f"could not perform this operation on a key that doesn't exist: {key}")
        document = self._documents[key]
        if not isinstance(document, list):
            raise DocumentStoreError(f"value at {key} is not an array")
        document.append(copy.deepcopy(value))
        return len(document)

    async def remove_from_array(self, key: str, path: str, index: int) -> Optional[Any]:
        await self._round_trip()
        self._check_path(path)
        document = self._documents.get(key)
        if not isinstance(document, list):
            return None
        if index < 0 or index >= len(document):
            return None
        return document.pop(index)

    async def _round_trip(self) -> None:
        self.calls += 1
        await asyncio.sleep(0)

    @staticmethod
    def _check_path(path: str) -> None:
        if path != ROOT_PATH:
            raise DocumentStoreError(f"only the root path is supported, got {path!r}")
