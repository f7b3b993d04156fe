"""Repository layer - storage abstractions and implementations."""

from storefront.repositories.protocols import KeyValueStore

__all__ = [
    "KeyValueStore",
]
