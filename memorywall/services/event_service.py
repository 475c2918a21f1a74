"""
memorywall.services.event_service — Events & Registration
==========================================================

Registration is append-only: there is no way to unregister.
"""

from __future__ import annotations

import logging

from memorywall.constants import EVENTS
from memorywall.database.store import RecordStore
from memorywall.engine.affinity import InterestSignal
from memorywall.errors import ConflictError, NotFoundError
from memorywall.services.affinity_service import record_signal

logger = logging.getLogger(__name__)


def list_events(store: RecordStore) -> list[dict]:
    return store.get(EVENTS, [])


def register_for_event(store: RecordStore, event_id: str, user_id: str) -> bool:
    """Add *user_id* to the event's registrants and bump affinity for its tags."""
    events = store.get(EVENTS, [])
    event = next((e for e in events if e["id"] == event_id), None)
    if event is None:
        raise NotFoundError("Event not found.")
    registered = event.setdefault("registered", [])
    if user_id in registered:
        raise ConflictError("Already registered.")

    registered.append(user_id)
    store.set(EVENTS, events)
    record_signal(store, user_id, event.get("tags", []), InterestSignal.EVENT_REGISTRATION)
    logger.info("User %s registered for event %s", user_id, event_id)
    return True
