"""In-memory implementation of KeyValueStore."""

from typing import Iterable, Mapping, Optional


class InMemoryKeyValueStore:
    """Dict-backed store for ephemeral sessions and tests."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        return {key: self._data.get(key) for key in keys}

    async def multi_set(self, items: Mapping[str, str]) -> None:
        # Single dict update: no await between writes
        self._data.update(items)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in list(keys):
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every stored pair."""
        return dict(self._data)
