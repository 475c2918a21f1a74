"""
memorywall.database.store — Whole-Collection Record Store
==========================================================

The only component that knows about the underlying medium.  Collections
are read and written as complete JSON documents; there is no partial or
streamed access.  Callers follow a read → mutate copy → write-back cycle.
:meth:`RecordStore.atomically` serializes those cycles within one store;
two actors with separate stores over the same medium can still overwrite
each other's changes (last writer wins).
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy import Engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from memorywall.database.models import Record

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordStore:
    """Typed get/set access to named collections in the ``records`` table.

    Usage::

        store = RecordStore(engine)
        posts = store.get("posts", [])
        posts.insert(0, new_post)
        store.set("posts", posts)
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        # Serializes read-modify-write cycles issued through this instance
        self._lock = threading.RLock()

    @property
    def engine(self) -> Engine:
        return self._engine

    def atomically(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run *func* while holding this store's lock.

        Operations routed through the same store never interleave their
        get/set cycles.  Separate stores sharing one medium are not
        coordinated and can still overwrite each other.
        """
        with self._lock:
            return func(*args, **kwargs)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get(self, key: str, fallback: Any = None) -> Any:
        """Return the deserialized collection stored under *key*.

        Returns *fallback* when the key is absent or its payload is not
        valid JSON.
        """
        with Session(self._engine) as session:
            row = session.get(Record, key)
            payload = row.value_json if row is not None else None

        if not payload:
            return fallback
        try:
            return json.loads(payload)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Unparseable payload under %r — using fallback.", key)
            return fallback

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        with Session(self._engine) as session:
            return list(session.scalars(select(Record.key).order_by(Record.key)).all())

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def set(self, key: str, value: Any) -> None:
        """Serialize *value* and replace whatever is stored under *key*.

        A write that cannot be persisted is logged and dropped; the
        previously stored value stays in effect.
        """
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            logger.exception("Could not serialize value for %r — write dropped.", key)
            return

        try:
            with Session(self._engine) as session:
                row = session.get(Record, key)
                if row is None:
                    session.add(Record(key=key, value_json=payload))
                else:
                    row.value_json = payload
                session.commit()
        except SQLAlchemyError:
            logger.exception("Storage write failed for %r — prior state kept.", key)

    def remove(self, key: str) -> None:
        """Delete *key*; missing keys are ignored."""
        try:
            with Session(self._engine) as session:
                session.execute(delete(Record).where(Record.key == key))
                session.commit()
        except SQLAlchemyError:
            logger.exception("Storage delete failed for %r.", key)
