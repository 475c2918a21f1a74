"""
memorywall.database.seed — Reference Dataset Seeder
====================================================

Populates a fresh medium from ``memorywall/seeds/reference.yaml`` exactly
once.  A ``seeded`` sentinel key marks the medium as initialized; later
calls see the sentinel and write nothing, so user changes are never
overwritten.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from memorywall.constants import (
    ALL_KEYS,
    CHANNELS,
    EVENTS,
    FLAGGED,
    POSTS,
    SEEDED,
    SKILLS,
    USERS,
)
from memorywall.database.store import RecordStore

logger = logging.getLogger(__name__)

_SEEDS_DIR = Path(__file__).resolve().parent.parent / "seeds"


def load_reference_data(filename: str = "reference.yaml") -> dict[str, Any]:
    """Load the reference dataset from the seeds directory."""
    path = _SEEDS_DIR / filename
    if not path.exists():
        logger.warning("Seed file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def seed_reference_data(store: RecordStore) -> bool:
    """Write the reference collections unless the medium is already seeded.

    Returns True if anything was written.
    """
    if store.get(SEEDED):
        logger.info("Medium already seeded — skipping.")
        return False

    data = load_reference_data()
    store.set(USERS, data.get(USERS, {}))
    store.set(POSTS, data.get(POSTS, []))
    store.set(CHANNELS, data.get(CHANNELS, {}))
    store.set(EVENTS, data.get(EVENTS, []))
    store.set(SKILLS, data.get(SKILLS, []))
    store.set(FLAGGED, [])
    store.set(SEEDED, True)

    logger.info(
        "Seeded %d users, %d posts, %d events, %d skills.",
        len(data.get(USERS, {})),
        len(data.get(POSTS, [])),
        len(data.get(EVENTS, [])),
        len(data.get(SKILLS, [])),
    )
    return True


def reset_store(store: RecordStore) -> None:
    """Dev utility: wipe every collection (session included) and reseed."""
    for key in ALL_KEYS:
        store.remove(key)
    seed_reference_data(store)
    logger.info("Medium reset to reference data.")
