"""Migrations for the key-value store tables.

The URL comes from dropset settings (DATABASE_URL), converted to its sync
driver form, so alembic.ini never carries a connection string.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from dropset.core.config import get_settings
from dropset.db.base import Base
from dropset.models import *  # noqa: F401, F403 - register kv_entries on Base.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()
store_url = settings.sync_database_url
config.set_main_option("sqlalchemy.url", store_url)

target_metadata = Base.metadata


def emit_sql_script() -> None:
    """Write the migration SQL to stdout for a store that is not reachable here."""
    context.configure(
        url=store_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    # render_as_batch: SQLite cannot ALTER most column properties in place
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


def upgrade_store() -> None:
    """Open a throwaway sync connection to the store file and apply revisions."""
    engine = create_engine(store_url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _migrate(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    emit_sql_script()
else:
    upgrade_store()
