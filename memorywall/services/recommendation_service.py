"""
memorywall.services.recommendation_service — Store-Backed Recommendations
==========================================================================

Loads the user's affinity map and the catalog collections, then hands off
to the pure ranking functions in :mod:`memorywall.engine.recommend`.
"""

from __future__ import annotations

import random

from memorywall.constants import EVENTS, SKILLS
from memorywall.database.store import RecordStore
from memorywall.engine.recommend import recommend_events, recommend_skills
from memorywall.services.identity_service import get_user


def event_recommendations(
    store: RecordStore, user_id: str, *, rng: random.Random | None = None
) -> list[dict]:
    """Unregistered events ranked for *user_id*; ``[]`` for unknown users."""
    user = get_user(store, user_id)
    if user is None:
        return []
    return recommend_events(
        user_id, user.get("tag_affinity") or {}, store.get(EVENTS, []), rng=rng
    )


def skill_suggestions(store: RecordStore, user_id: str) -> list[dict]:
    """Skills ranked for *user_id*; ``[]`` for unknown users."""
    user = get_user(store, user_id)
    if user is None:
        return []
    return recommend_skills(user.get("tag_affinity") or {}, store.get(SKILLS, []))
