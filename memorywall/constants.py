"""
memorywall.constants — Shared Constants & Helpers
==================================================

Single source of truth for collection keys, roles, the channel → tag map
and the small time/id helpers every service needs.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

# ---------------------------------------------------------------------------
# Collection keys in the records table
# ---------------------------------------------------------------------------
USERS = "users"
SESSION = "session"
POSTS = "posts"
CHANNELS = "channels"
EVENTS = "events"
SKILLS = "skills"
FLAGGED = "flagged"
SEEDED = "seeded"

ALL_KEYS: tuple[str, ...] = (
    USERS, POSTS, CHANNELS, EVENTS, SKILLS, FLAGGED, SESSION, SEEDED,
)

# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------
ROLE_STUDENT = "student"
ROLE_ALUMNI = "alumni"
ROLE_ADMIN = "admin"

# Reporter recorded on automatic flags
SYSTEM_REPORTER = "system"

DEFAULT_POST_EMOJI = "\U0001f4dd"  # 📝
ELLIPSIS = "…"

# ---------------------------------------------------------------------------
# Channel activity → interest tags (channels absent here map to no tags)
# ---------------------------------------------------------------------------
CHANNEL_TAGS: dict[str, tuple[str, ...]] = {
    "general": (),
    "placements": ("#placement",),
    "technical": ("#coding",),
    "events": (),
    "fests": ("#cultural",),
    "alumni-connect": ("#alumni",),
    "mentorship": ("#placement",),
}


# ---------------------------------------------------------------------------
# Id / time helpers
# ---------------------------------------------------------------------------
def new_id() -> str:
    """Opaque record id, e.g. ``id_3f9c0a1b2``."""
    return "id_" + uuid.uuid4().hex[:9]


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def parse_iso(iso: str) -> datetime:
    """Parse an ISO timestamp; naive or ``Z``-suffixed values are taken as UTC."""
    dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def relative_time(iso: str, now: datetime | None = None) -> str:
    """Human-relative age label for a timestamp ("5m ago", "Yesterday", ...)."""
    then = parse_iso(iso)
    diff = ((now or datetime.now(UTC)) - then).total_seconds()
    if diff < 60:
        return "Just now"
    if diff < 3600:
        return f"{int(diff // 60)}m ago"
    if diff < 86400:
        return f"{int(diff // 3600)}h ago"
    if diff < 86400 * 2:
        return "Yesterday"
    if diff < 86400 * 7:
        return f"{int(diff // 86400)}d ago"
    local = then.astimezone()
    return f"{local.day} {local.strftime('%b')}"


def format_clock(iso: str) -> str:
    """Clock time for chat messages, ``HH:MM`` in the local time zone."""
    return parse_iso(iso).astimezone().strftime("%H:%M")
