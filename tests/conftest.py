"""Shared fixtures for the memory server tests."""

from __future__ import annotations

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from memory_server.memory.backends import InMemoryDocumentBackend
from memory_server.memory.memory_store import MemoryStore
from memory_server.utils.config import Config


class FailingBackend(InMemoryDocumentBackend):
    """Backend whose every data primitive fails like an unreachable Redis."""

    def __init__(self, config=None, message: str = "Connection refused"):
        super().__init__(config)
        self.message = message

    async def _fail(self, *args, **kwargs):
        self.calls += 1
        raise RedisConnectionError(self.message)

    ping = _fail
    exists = _fail
    get_document = _fail
    set_document = _fail
    append_to_array = _fail
    remove_from_array = _fail


@pytest.fixture
def config() -> Config:
    return Config(backend_type="memory")


@pytest.fixture
def backend(config: Config) -> InMemoryDocumentBackend:
    return InMemoryDocumentBackend(config)


@pytest.fixture
def store(config: Config, backend: InMemoryDocumentBackend) -> MemoryStore:
    return MemoryStore(config, backend=backend)


@pytest.fixture
def legacy_store(backend: InMemoryDocumentBackend) -> MemoryStore:
    return MemoryStore(Config(backend_type="memory", atomic_append=False), backend=backend)


@pytest.fixture
def failing_store(config: Config) -> MemoryStore:
    return MemoryStore(config, backend=FailingBackend(config))
