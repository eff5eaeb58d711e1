"""SQLAlchemy declarative base for the on-device store tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for the key-value table (and any future store tables)."""
