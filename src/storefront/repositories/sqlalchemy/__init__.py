"""SQLAlchemy repository implementations."""

from storefront.repositories.sqlalchemy.database import (
    get_session_factory,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from storefront.repositories.sqlalchemy.kv_store import SqlAlchemyKeyValueStore

__all__ = [
    "get_session_factory",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyKeyValueStore",
]
