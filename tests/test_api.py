"""Tests for the REST API and application wiring."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from memory_server.main import create_app
from memory_server.memory.backends import InMemoryDocumentBackend
from memory_server.memory.memory_store import MemoryStore
from memory_server.utils.config import Config

ALICE = {"x-user-email": "alice@example.com"}


@pytest.fixture
def client(config: Config, store: MemoryStore):
    with TestClient(create_app(config, store)) as test_client:
        yield test_client


class TestMemoryEndpoints:
    def test_scenario(self, client: TestClient):
        response = client.post("/memory", json={"record": "likes tea"}, headers=ALICE)
        assert response.status_code == 200
        assert response.json()["text"].startswith("Stored memory about: likes tea on ")

        client.post("/memory", json={"record": "works at Acme"}, headers=ALICE)
        assert client.get("/memory", headers=ALICE).json() == ["likes tea", "works at Acme"]

        response = client.delete("/memory/0", headers=ALICE)
        assert response.json()["text"] == "Removed memory item at index 0 about: likes tea"
        assert client.get("/memory", headers=ALICE).json() == ["works at Acme"]

        response = client.delete("/memory/5", headers=ALICE)
        assert response.json()["text"] == "No memory item found at index 5."
        assert client.get("/memory", headers=ALICE).json() == ["works at Acme"]

    def test_recall_is_json(self, client: TestClient):
        response = client.get("/memory", headers=ALICE)
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == []

    def test_guest(self, client: TestClient, backend: InMemoryDocumentBackend):
        response = client.post("/memory", json={"record": "likes tea"})
        assert response.json()["text"] == "Memory feature is not available for guest users."
        assert client.delete("/memory/0").json()["text"] == "Memory feature is not available for guest users."
        assert client.get("/memory").json() == {"error": "User not found"}
        assert backend.calls == 0

    def test_users_do_not_see_each_other(self, client: TestClient):
        client.post("/memory", json={"record": "likes tea"}, headers=ALICE)
        assert client.get("/memory", headers={"x-user-email": "bob@example.com"}).json() == []

    def test_record_must_be_string(self, client: TestClient):
        response = client.post("/memory", json={"record": 42}, headers=ALICE)
        assert response.status_code == 422

    def test_index_must_be_integer(self, client: TestClient):
        response = client.delete("/memory/first", headers=ALICE)
        assert response.status_code == 422

    def test_configured_identity_header(self, store: MemoryStore):
        config = Config(backend_type="memory", identity_header="X-User-Id")
        with TestClient(create_app(config, store)) as client:
            client.post("/memory", json={"record": "a"}, headers={"x-user-id": "u-1"})
            assert client.get("/memory", headers={"x-user-id": "u-1"}).json() == ["a"]
            assert client.get("/memory", headers=ALICE).json() == {"error": "User not found"}


class TestStoreFailures:
    def test_errors_are_text_not_http_errors(self, config: Config, failing_store: MemoryStore):
        with TestClient(create_app(config, failing_store)) as client:
            response = client.post("/memory", json={"record": "likes tea"}, headers=ALICE)
            assert response.status_code == 200
            assert response.json()["text"] == "Error storing memory item: Connection refused"

            assert client.get("/memory", headers=ALICE).json() == {"error": "Connection refused"}

            health = client.get("/health").json()
            assert health["status"] == "degraded"
            assert health["components"]["document_store"]["status"] == "unhealthy"


class TestHealth:
    def test_health(self, client: TestClient):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["components"]["document_store"] == {"status": "healthy", "type": "memory"}

    def test_ping(self, client: TestClient):
        assert client.get("/ping").json() == {"ping": "pong"}
