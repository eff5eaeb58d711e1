"""Async database engine and session factory for the on-device store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dropset.core.config import Settings, get_settings
from dropset.db.base import Base


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine; pool tuning only applies to server databases."""
    kwargs: dict = {"echo": settings.debug}
    if not settings.is_sqlite:
        kwargs["pool_size"] = settings.database_pool_size
        kwargs["max_overflow"] = settings.database_max_overflow
    return create_async_engine(settings.database_url, **kwargs)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def create_tables(bind: AsyncEngine) -> None:
    """Create store tables if missing (Alembic remains the migration path)."""
    import dropset.models  # noqa: F401 - register models on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


settings = get_settings()

engine = build_engine(settings)

async_session_maker = build_session_maker(engine)
