"""
memorywall.engine.affinity — Interest Signals and Weights
==========================================================

Every interaction that says something about a user's interests is an
:class:`InterestSignal`.  Each signal carries a fixed weight that is added
to the user's per-tag counter.  Counters only ever grow.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable

__all__ = ["AFFINITY_WEIGHTS", "InterestSignal", "apply_bump", "unique_tags"]


class InterestSignal(enum.StrEnum):
    """Interactions that feed the affinity ledger."""
    EVENT_REGISTRATION = "EVENT_REGISTRATION"
    POST_CREATED = "POST_CREATED"
    CHANNEL_MESSAGE = "CHANNEL_MESSAGE"
    POST_LIKED = "POST_LIKED"


# ---------------------------------------------------------------------------
# Weight per signal (registration > authorship > passive activity)
# ---------------------------------------------------------------------------
AFFINITY_WEIGHTS: dict[InterestSignal, int] = {
    InterestSignal.EVENT_REGISTRATION: 3,
    InterestSignal.POST_CREATED: 2,
    InterestSignal.CHANNEL_MESSAGE: 1,
    InterestSignal.POST_LIKED: 1,
}


def unique_tags(tags: Iterable[str]) -> list[str]:
    """Drop duplicate tags, keeping first-seen order."""
    return list(dict.fromkeys(tags))


def apply_bump(affinity: dict[str, int], tags: Iterable[str], amount: int) -> dict[str, int]:
    """Return a copy of *affinity* with *amount* added to every tag in *tags*.

    Missing counters start at zero.  Raises ``ValueError`` for a negative
    amount.
    """
    if amount < 0:
        raise ValueError(f"Affinity bumps must be non-negative, got {amount}")
    bumped = dict(affinity)
    for tag in unique_tags(tags):
        bumped[tag] = bumped.get(tag, 0) + amount
    return bumped
