"""
memorywall.database.models — SQLAlchemy 2.0 Data Models
========================================================

The durable medium is deliberately schemaless: one ``records`` row per
collection key, holding the whole collection as a JSON document.

Tables:
- records — collection key → serialized collection
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all MemoryWall ORM models."""


# ---------------------------------------------------------------------------
# Record — one row per collection
# ---------------------------------------------------------------------------
class Record(Base):
    """Key-value row.  ``value_json`` is always a complete collection;
    typed access lives in :class:`~memorywall.database.store.RecordStore`.
    """
    __tablename__ = "records"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Record key={self.key!r} bytes={len(self.value_json or '')}>"
