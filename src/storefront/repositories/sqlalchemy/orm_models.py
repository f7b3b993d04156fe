"""SQLAlchemy ORM model definitions."""

from sqlalchemy import Column, String, Text

from storefront.repositories.sqlalchemy.database import Base


class KeyValueORM(Base):
    """SQLAlchemy model for a single key/value slot."""

    __tablename__ = "kv_items"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
