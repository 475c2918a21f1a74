"""
memorywall.services.affinity_service — The Affinity Ledger
===========================================================

Single mutation point for per-user tag-affinity counters.  Every interest
signal (post, like, channel message, event registration) funnels through
:func:`bump_tag_affinity`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from memorywall.constants import USERS
from memorywall.database.store import RecordStore
from memorywall.engine.affinity import AFFINITY_WEIGHTS, InterestSignal, apply_bump

logger = logging.getLogger(__name__)


def bump_tag_affinity(
    store: RecordStore, user_id: str, tags: Iterable[str], amount: int = 1
) -> None:
    """Add *amount* to *user_id*'s counter for each tag.

    Silently does nothing for unknown users.
    """
    tags = list(tags)
    if not tags:
        return
    users = store.get(USERS, {})
    user = users.get(user_id)
    if user is None:
        return
    user["tag_affinity"] = apply_bump(user.get("tag_affinity") or {}, tags, amount)
    store.set(USERS, users)
    logger.debug("Affinity +%d for %s on %s", amount, user_id, tags)


def record_signal(
    store: RecordStore, user_id: str, tags: Iterable[str], signal: InterestSignal
) -> None:
    """Bump affinity by the weight of *signal*."""
    bump_tag_affinity(store, user_id, tags, AFFINITY_WEIGHTS[signal])
