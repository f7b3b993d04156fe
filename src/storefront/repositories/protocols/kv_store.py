"""Key/value store protocol for durable on-device storage."""

from typing import Iterable, Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """
    Interface for durable string key/value storage.

    ``multi_set`` and ``multi_remove`` are all-or-nothing: a reader never
    observes a partially applied batch.
    """

    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    async def remove_item(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        ...

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        """Return a mapping for every requested key (None when absent)."""
        ...

    async def multi_set(self, items: Mapping[str, str]) -> None:
        """Store every pair as a single batch."""
        ...

    async def multi_remove(self, keys: Iterable[str]) -> None:
        """Remove every key as a single batch."""
        ...
