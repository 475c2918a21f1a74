"""Alembic environment for the MemoryWall ``records`` table.

The schema is a single key-value table (one row per collection), so the
migration history is short.  The URL is resolved the same way the
application resolves it: ``DATABASE_URL`` from the environment or ``.env``,
else the URL in ``alembic.ini``.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from dotenv import load_dotenv

from alembic import context

load_dotenv()

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from memorywall.database.engine import create_db_engine  # noqa: E402
from memorywall.database.models import Base  # noqa: E402

target_metadata = Base.metadata


def _database_url() -> str:
    return os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")


def run_migrations_offline() -> None:
    """Render the ``records`` DDL as SQL instead of executing it."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations through the same engine factory the app uses."""
    engine = create_db_engine(_database_url())
    try:
        with engine.connect() as connection:
            # SQLite cannot ALTER columns in place; batch mode recreates the table
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
