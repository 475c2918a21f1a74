"""
memorywall.engine.moderation — Post Status State Machine
=========================================================

Pure transition logic for post visibility.  No store I/O.

States and transitions::

    create ──clean──────▶ pending_review
    create ──denylisted─▶ flagged
    approved ──user flag─▶ under_review
    <any> ──admin────────▶ approved | rejected

The admin transition is intentionally unguarded: any state (including
``rejected``) can be moved to ``approved`` or ``rejected``.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "MODERATION_DECISIONS",
    "QUEUE_STATUSES",
    "PostStatus",
    "ScreenResult",
    "screen_text",
    "status_on_create",
    "status_on_flag",
    "status_on_moderate",
]


class PostStatus(enum.StrEnum):
    PENDING_REVIEW = "pending_review"
    FLAGGED = "flagged"
    APPROVED = "approved"
    REJECTED = "rejected"
    UNDER_REVIEW = "under_review"


# Statuses shown in the admin moderation queue
QUEUE_STATUSES: frozenset[PostStatus] = frozenset({
    PostStatus.PENDING_REVIEW,
    PostStatus.FLAGGED,
    PostStatus.UNDER_REVIEW,
})

# Statuses an admin may set
MODERATION_DECISIONS: frozenset[PostStatus] = frozenset({
    PostStatus.APPROVED,
    PostStatus.REJECTED,
})


@dataclass(frozen=True, slots=True)
class ScreenResult:
    """Outcome of the denylist screen."""

    allowed: bool
    matched: str | None = None


def screen_text(text: str, denylist: Iterable[str]) -> ScreenResult:
    """Case-insensitive substring match of *text* against *denylist*.

    Reports the first denylisted term found, in denylist order.
    """
    lowered = text.lower()
    for term in denylist:
        if term and term.lower() in lowered:
            return ScreenResult(allowed=False, matched=term)
    return ScreenResult(allowed=True)


def status_on_create(screen: ScreenResult) -> PostStatus:
    return PostStatus.PENDING_REVIEW if screen.allowed else PostStatus.FLAGGED


def status_on_flag(current: str) -> str:
    """A user report only pulls approved posts back into review."""
    if current == PostStatus.APPROVED:
        return PostStatus.UNDER_REVIEW
    return current


def status_on_moderate(current: str, requested: str) -> PostStatus:
    """Admin decision.  *current* is accepted for symmetry but never checked.

    Raises ``ValueError`` if *requested* is not a moderation decision.
    """
    decision = PostStatus(requested)
    if decision not in MODERATION_DECISIONS:
        raise ValueError(f"Not a moderation decision: {requested!r}")
    return decision
