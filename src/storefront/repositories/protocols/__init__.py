"""Repository protocol definitions (interfaces)."""

from storefront.repositories.protocols.kv_store import KeyValueStore

__all__ = [
    "KeyValueStore",
]
