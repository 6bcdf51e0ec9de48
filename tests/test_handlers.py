"""Tests for the remember / forget / recall request handlers."""

from __future__ import annotations

import json

import pytest

from memory_server import handlers
from memory_server.memory.backends import InMemoryDocumentBackend
from memory_server.memory.memory_store import MemoryStore

USER = "alice@example.com"


class TestGuest:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("identity", [None, ""])
    async def test_all_operations_skip_the_store(self, store: MemoryStore, backend: InMemoryDocumentBackend, identity):
        assert await handlers.remember(store, identity, "likes tea") == handlers.GUEST_MESSAGE
        assert await handlers.forget(store, identity, 0) == handlers.GUEST_MESSAGE
        assert json.loads(await handlers.recall(store, identity)) == {"error": "User not found"}
        assert backend.calls == 0


class TestRemember:
    @pytest.mark.asyncio
    async def test_confirmation_text(self, store: MemoryStore):
        text = await handlers.remember(store, USER, "likes tea")
        assert text.startswith("Stored memory about: likes tea on ")
        assert text.endswith("+00:00")

    @pytest.mark.asyncio
    async def test_writes_under_derived_key(self, store: MemoryStore, backend: InMemoryDocumentBackend):
        await handlers.remember(store, USER, "likes tea")
        assert await backend.get_document(f"memory:{USER}") == [["likes tea"]]

    @pytest.mark.asyncio
    async def test_store_error_text(self, failing_store: MemoryStore):
        text = await handlers.remember(failing_store, USER, "likes tea")
        assert text == "Error storing memory item: Connection refused"


class TestForget:
    @pytest.mark.asyncio
    async def test_removed_text(self, store: MemoryStore):
        await handlers.remember(store, USER, "likes tea")
        text = await handlers.forget(store, USER, 0)
        assert text == "Removed memory item at index 0 about: likes tea"

    @pytest.mark.asyncio
    async def test_miss_text(self, store: MemoryStore):
        assert await handlers.forget(store, USER, 3) == "No memory item found at index 3."

    @pytest.mark.asyncio
    async def test_store_error_text(self, failing_store: MemoryStore):
        text = await handlers.forget(failing_store, USER, 2)
        assert text == "Error removing memory item 2: Connection refused"


class TestRecall:
    @pytest.mark.asyncio
    async def test_empty_list_for_new_user(self, store: MemoryStore):
        assert json.loads(await handlers.recall(store, USER)) == []

    @pytest.mark.asyncio
    async def test_lists_items(self, store: MemoryStore):
        await handlers.remember(store, USER, "likes tea")
        await handlers.remember(store, USER, "works at Acme")
        assert json.loads(await handlers.recall(store, USER)) == ["likes tea", "works at Acme"]

    @pytest.mark.asyncio
    async def test_store_error_payload(self, failing_store: MemoryStore):
        assert json.loads(await handlers.recall(failing_store, USER)) == {"error": "Connection refused"}
