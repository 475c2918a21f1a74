"""
memorywall.database.engine — Database Connection & Async Helper
================================================================

**Why this file exists:**
Every public MemoryWall operation is asynchronous in contract, but the
record store talks to SQLAlchemy synchronously.  ``run_db`` ships a
synchronous service function to a worker thread via ``asyncio.to_thread``
so callers can ``await`` it without blocking their event loop.

Usage::

    from memorywall.database.engine import create_db_engine, init_db, run_db

    engine = create_db_engine()          # reads DATABASE_URL from .env
    init_db(engine)                      # CREATE TABLE IF NOT EXISTS …

    user = await run_db(get_user, store, user_id)
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine

from memorywall.database.models import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

DEFAULT_DATABASE_URL = "sqlite:///memorywall.db"


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(url: str | None = None) -> Engine:
    """Build a SQLAlchemy :class:`Engine`.

    *url* wins over the ``DATABASE_URL`` env var, which wins over the local
    SQLite file ``memorywall.db``.
    """
    url = url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL

    kwargs: dict = {"echo": False, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Service calls run on worker threads (see run_db)
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(url, **kwargs)
    logger.info("Database engine created → %s", engine.url.render_as_string(hide_password=True))
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create the ``records`` table if it does not exist.

    .. note::

        In production the schema is managed by Alembic (``alembic upgrade
        head``).  ``create_all`` is retained for dev/test environments.
    """
    Base.metadata.create_all(engine)
    logger.info("Database tables verified / created.")


# ---------------------------------------------------------------------------
# Async bridge
# ---------------------------------------------------------------------------
async def run_db(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Run a **synchronous** store function on a background thread.

    ``run_db`` itself does not serialize calls.  Read-modify-write service
    functions go through :meth:`RecordStore.atomically` (see
    :class:`~memorywall.platform.MemoryWall`) so they cannot interleave.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
