"""
Memory package.

This package provides per-user memory lists: identity and key helpers, the
JSON-document backends, and the memory store built on top of them.
"""

from memory_server.memory.identity import derive_key, resolve_identity
from memory_server.memory.memory_store import MemoryStore, StoreResult, StoreStatus

__all__ = ["MemoryStore", "StoreResult", "StoreStatus", "derive_key", "resolve_identity"]
