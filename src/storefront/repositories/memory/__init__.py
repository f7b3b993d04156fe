"""In-memory repository implementations."""

from storefront.repositories.memory.kv_store import InMemoryKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
]
