"""Database package: engine, session factory, base."""

from dropset.db.session import async_session_maker, build_engine, build_session_maker, create_tables

__all__ = ["async_session_maker", "build_engine", "build_session_maker", "create_tables"]
