"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import asyncio
import os
import random
import time
from contextlib import contextmanager

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from memorywall.config import MemoryWallConfig
from memorywall.constants import EVENTS, SKILLS, USERS
from memorywall.database.models import Base
from memorywall.database.seed import seed_reference_data
from memorywall.database.store import RecordStore


@contextmanager
def local_zone(name: str):
    """Temporarily switch the process time zone (POSIX only)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset unavailable on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = name
    time.tzset()
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = previous
        time.tzset()


def run_async(coro):
    """Run an async coroutine in a new event loop (no pytest-asyncio)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def db_engine() -> Engine:
    """In-memory SQLite engine with the records table.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used in ``run_db``).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def store(db_engine: Engine) -> RecordStore:
    """An empty (unseeded) store."""
    return RecordStore(db_engine)


@pytest.fixture
def seeded_store(store: RecordStore) -> RecordStore:
    """A store loaded with the reference dataset."""
    seed_reference_data(store)
    return store


@pytest.fixture
def cfg() -> MemoryWallConfig:
    return MemoryWallConfig(session_poll_seconds=0.02, channel_poll_seconds=0.02)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


def add_user(
    store: RecordStore,
    user_id: str,
    *,
    role: str = "student",
    email: str | None = None,
    affinity: dict[str, int] | None = None,
) -> dict:
    """Insert a user record directly, bypassing registration."""
    users = store.get(USERS, {})
    user = {
        "id": user_id,
        "name": user_id.title(),
        "email": email or f"{user_id}@college.edu",
        "initials": user_id[:2].upper(),
        "role": role,
        "branch": "CSE",
        "batch": "2026",
        "bio": "",
        "location": "",
        "grad_index": 0,
        "joined_at": "2024-01-01T00:00:00+00:00",
        "tag_affinity": dict(affinity or {}),
    }
    users[user_id] = user
    store.set(USERS, users)
    return user


def add_event(store: RecordStore, event_id: str, tags: list[str], registered=None) -> dict:
    events = store.get(EVENTS, [])
    event = {
        "id": event_id, "title": event_id, "day": "01", "mon": "Jan", "sub": "",
        "tags": tags, "registered": list(registered or []),
    }
    events.append(event)
    store.set(EVENTS, events)
    return event


def add_skill(store: RecordStore, skill_id: str, tags: list[str]) -> dict:
    skills = store.get(SKILLS, [])
    skill = {"id": skill_id, "name": skill_id, "tags": tags}
    skills.append(skill)
    store.set(SKILLS, skills)
    return skill


def affinity_of(store: RecordStore, user_id: str) -> dict[str, int]:
    return store.get(USERS, {})[user_id]["tag_affinity"]
