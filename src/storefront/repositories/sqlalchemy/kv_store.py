"""SQLAlchemy implementation of KeyValueStore."""

from typing import Iterable, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core.exceptions import StorageError
from storefront.repositories.sqlalchemy.orm_models import KeyValueORM


class SqlAlchemyKeyValueStore:
    """SQLite-backed key/value store. Batches run in one transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        try:
            async with self._session_factory() as session:
                orm_item = await session.get(KeyValueORM, key)
                return orm_item.value if orm_item else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read '{key}': {exc}") from exc

    async def set_item(self, key: str, value: str) -> None:
        """Store value under key."""
        await self.multi_set({key: value})

    async def remove_item(self, key: str) -> None:
        """Remove key if present."""
        await self.multi_remove([key])

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        """Return values for every requested key, in request order."""
        keys = list(keys)
        if not keys:
            return {}
        try:
            async with self._session_factory() as session:
                rows = await session.execute(
                    select(KeyValueORM).where(KeyValueORM.key.in_(keys))
                )
                found = {row.key: row.value for row in rows.scalars()}
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read {keys}: {exc}") from exc
        return {key: found.get(key) for key in keys}

    async def multi_set(self, items: Mapping[str, str]) -> None:
        """Upsert every pair inside a single transaction."""
        if not items:
            return
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    for key, value in items.items():
                        await session.merge(KeyValueORM(key=key, value=value))
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to write {list(items)}: {exc}") from exc

    async def multi_remove(self, keys: Iterable[str]) -> None:
        """Delete every key inside a single transaction."""
        keys = list(keys)
        if not keys:
            return
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        delete(KeyValueORM).where(KeyValueORM.key.in_(keys))
                    )
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to remove {keys}: {exc}") from exc
