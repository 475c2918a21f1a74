"""
memorywall.services.stats_service — Home Page Counters
=======================================================
"""

from __future__ import annotations

from memorywall.constants import EVENTS, POSTS, ROLE_ALUMNI, ROLE_STUDENT, USERS
from memorywall.database.store import RecordStore
from memorywall.engine.moderation import PostStatus


def platform_stats(store: RecordStore) -> dict[str, int]:
    """Approved posts, students, alumni and events."""
    posts = store.get(POSTS, [])
    users = list(store.get(USERS, {}).values())
    return {
        "total_posts": sum(1 for p in posts if p.get("status") == PostStatus.APPROVED),
        "total_students": sum(1 for u in users if u.get("role") == ROLE_STUDENT),
        "total_alumni": sum(1 for u in users if u.get("role") == ROLE_ALUMNI),
        "total_events": len(store.get(EVENTS, [])),
    }
