"""
memorywall.services.channel_service — Chat Channels
====================================================

Append-only message lists keyed by channel id.  Unlike posts, messages
that hit the denylist are rejected outright rather than quarantined.
"""

from __future__ import annotations

import logging
from typing import Any

from memorywall.config import MemoryWallConfig
from memorywall.constants import CHANNEL_TAGS, CHANNELS, format_clock, new_id, utc_now_iso
from memorywall.database.store import RecordStore
from memorywall.engine.affinity import InterestSignal
from memorywall.engine.moderation import screen_text
from memorywall.errors import AuthError, ContentRejected
from memorywall.services.affinity_service import record_signal
from memorywall.services.identity_service import get_user

logger = logging.getLogger(__name__)


def _annotate(message: dict) -> dict[str, Any]:
    return {**message, "time_formatted": format_clock(message["created_at"])}


def list_messages(store: RecordStore, channel_id: str) -> list[dict[str, Any]]:
    """All messages in *channel_id*, oldest first."""
    channels = store.get(CHANNELS, {})
    return [_annotate(m) for m in channels.get(channel_id, [])]


def send_message(
    store: RecordStore,
    cfg: MemoryWallConfig,
    channel_id: str,
    text: str,
    user_id: str,
) -> dict[str, Any]:
    """Append a message snapshot and return it (annotated)."""
    user = get_user(store, user_id)
    if user is None:
        raise AuthError("Not signed in.")
    screen = screen_text(text, cfg.denylist)
    if not screen.allowed:
        logger.info("Message from %s to #%s rejected (matched %r)", user_id, channel_id, screen.matched)
        raise ContentRejected("Message flagged for review.")

    message = {
        "id": new_id(),
        "text": text.strip(),
        "author_id": user_id,
        "author_name": user.get("name"),
        "author_initials": user.get("initials"),
        "role": user.get("role"),
        "grad_index": user.get("grad_index"),
        "created_at": utc_now_iso(),
    }
    channels = store.get(CHANNELS, {})
    channels.setdefault(channel_id, []).append(message)
    store.set(CHANNELS, channels)

    tags = CHANNEL_TAGS.get(channel_id, ())
    if tags:
        record_signal(store, user_id, tags, InterestSignal.CHANNEL_MESSAGE)
    return _annotate(message)
