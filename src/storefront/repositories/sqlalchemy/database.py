"""Async database engine and session management."""

from pathlib import Path
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Module-level database state, set by init_db
_engine: Optional[AsyncEngine] = None
_SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory opened by ``init_db``."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialized; await init_db() first")
    return _SessionLocal


async def init_db(database_url: str) -> None:
    """Open the database at ``database_url`` and create missing tables."""
    global _engine, _SessionLocal

    await reset_database()

    _engine = create_async_engine(database_url, echo=False)
    _SessionLocal = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Import ORM models and create tables
    from storefront.repositories.sqlalchemy import orm_models  # noqa: F401

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db_with_path(db_path: Path) -> None:
    """Initialize a SQLite database at a specific path."""
    await init_db(f"sqlite+aiosqlite:///{db_path}")


async def reset_database() -> None:
    """Reset database state (for reconfiguration)."""
    global _engine, _SessionLocal

    if _engine is not None:
        await _engine.dispose()

    _engine = None
    _SessionLocal = None
