"""
memorywall.services.post_service — Posts, Reactions & Moderation Actions
=========================================================================

CRUD over the ``posts`` collection plus the moderation audit trail in
``flagged``.  Every operation reads the whole collection, mutates it in
memory and writes it back.

Side effects:
  * create_post  → author affinity (POST_CREATED), auto-flag on denylist hit
  * toggle_like  → liker affinity (POST_LIKED) on like only, never reversed
  * flag_post    → audit record, approved → under_review
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from memorywall.config import MemoryWallConfig
from memorywall.constants import (
    DEFAULT_POST_EMOJI,
    ELLIPSIS,
    FLAGGED,
    POSTS,
    ROLE_ADMIN,
    SYSTEM_REPORTER,
    new_id,
    parse_iso,
    relative_time,
    utc_now_iso,
)
from memorywall.database.store import RecordStore
from memorywall.engine.affinity import InterestSignal, unique_tags
from memorywall.engine.moderation import (
    QUEUE_STATUSES,
    PostStatus,
    screen_text,
    status_on_create,
    status_on_flag,
    status_on_moderate,
)
from memorywall.errors import AuthError, NotFoundError, ValidationError
from memorywall.services.affinity_service import record_signal
from memorywall.services.identity_service import get_user

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"
KEYWORD_MATCH_REASON = "keyword_match"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def make_excerpt(content: str, limit: int) -> str:
    body = content.strip()
    return body[:limit] + (ELLIPSIS if len(body) > limit else "")


def _find_post(posts: list[dict], post_id: str) -> dict:
    post = next((p for p in posts if p["id"] == post_id), None)
    if post is None:
        raise NotFoundError("Post not found.")
    return post


def _require_admin(store: RecordStore, admin_id: str) -> dict:
    admin = get_user(store, admin_id)
    if admin is None or admin.get("role") != ROLE_ADMIN:
        raise AuthError("Unauthorized.")
    return admin


def _append_flag(
    store: RecordStore, post_id: str, reason: str, reporter: str
) -> dict:
    record = {
        "type": "post",
        "target_id": post_id,
        "reason": reason,
        "reporter": reporter,
        "flagged_at": utc_now_iso(),
    }
    flags = store.get(FLAGGED, [])
    flags.append(record)
    store.set(FLAGGED, flags)
    return record


def _toggle_member(members: list[str], user_id: str) -> bool:
    """Array-union / array-remove.  Returns True if *user_id* was added."""
    if user_id in members:
        members.remove(user_id)
        return False
    members.append(user_id)
    return True


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def list_posts(
    store: RecordStore,
    *,
    status: str = PostStatus.APPROVED,
    limit: int = 30,
    author_id: str | None = None,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Posts newest first, annotated with ``time_ago``, ``like_count`` and
    ``clap_count``.  ``status="all"`` disables the status filter.
    """
    posts = store.get(POSTS, [])
    if status != ALL_STATUSES:
        posts = [p for p in posts if p.get("status") == status]
    if author_id:
        posts = [p for p in posts if p.get("author_id") == author_id]
    posts.sort(key=lambda p: parse_iso(p["created_at"]), reverse=True)

    return [
        {
            **p,
            "time_ago": relative_time(p["created_at"], now),
            "like_count": len(p.get("likes", [])),
            "clap_count": len(p.get("claps", [])),
        }
        for p in posts[:limit]
    ]


def moderation_queue(store: RecordStore, admin_id: str) -> list[dict]:
    """Admin only: every post awaiting a moderation decision."""
    _require_admin(store, admin_id)
    return [p for p in store.get(POSTS, []) if p.get("status") in QUEUE_STATUSES]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def create_post(
    store: RecordStore,
    cfg: MemoryWallConfig,
    *,
    title: str,
    content: str,
    tags: list[str],
    category: str,
    emoji: str | None = None,
    author_id: str,
) -> str:
    """Create a post and return its id.

    Posts start in ``pending_review``; a denylist hit puts them in
    ``flagged`` and appends a system FlagRecord.  Either way the post is
    stored and the author's affinity bumped.
    """
    author = get_user(store, author_id)
    if author is None:
        raise AuthError("Not signed in.")

    screen = screen_text(f"{title} {content}", cfg.denylist)
    tags = unique_tags(tags)
    post = {
        "id": new_id(),
        "title": title.strip(),
        "content": content.strip(),
        "excerpt": make_excerpt(content, cfg.excerpt_chars),
        "tags": tags,
        "category": category,
        "emoji": emoji or DEFAULT_POST_EMOJI,
        "grad_index": author.get("grad_index"),
        "author_id": author_id,
        "author_name": author.get("name"),
        "author_initials": author.get("initials"),
        "status": status_on_create(screen).value,
        "created_at": utc_now_iso(),
        "likes": [],
        "claps": [],
    }

    posts = store.get(POSTS, [])
    posts.insert(0, post)
    store.set(POSTS, posts)

    record_signal(store, author_id, tags, InterestSignal.POST_CREATED)

    if not screen.allowed:
        _append_flag(store, post["id"], KEYWORD_MATCH_REASON, SYSTEM_REPORTER)
        logger.info("Post %s auto-flagged (matched %r)", post["id"], screen.matched)
    else:
        logger.info("Post %s created by %s, pending review", post["id"], author_id)
    return post["id"]


def toggle_like(store: RecordStore, post_id: str, user_id: str) -> dict[str, Any]:
    """Like / unlike.  Returns ``{"liked": bool, "count": int}``."""
    posts = store.get(POSTS, [])
    post = _find_post(posts, post_id)
    liked = _toggle_member(post.setdefault("likes", []), user_id)
    store.set(POSTS, posts)

    if liked:
        record_signal(store, user_id, post.get("tags", []), InterestSignal.POST_LIKED)
    return {"liked": liked, "count": len(post["likes"])}


def toggle_clap(store: RecordStore, post_id: str, user_id: str) -> dict[str, Any]:
    """Clap / un-clap.  Returns ``{"clapped": bool, "count": int}``."""
    posts = store.get(POSTS, [])
    post = _find_post(posts, post_id)
    clapped = _toggle_member(post.setdefault("claps", []), user_id)
    store.set(POSTS, posts)
    return {"clapped": clapped, "count": len(post["claps"])}


def flag_post(store: RecordStore, post_id: str, user_id: str, reason: str) -> dict:
    """Report a post.  The report is always recorded; an approved post goes
    back to ``under_review``.  Returns the FlagRecord.
    """
    record = _append_flag(store, post_id, reason, user_id)

    posts = store.get(POSTS, [])
    post = next((p for p in posts if p["id"] == post_id), None)
    if post is not None:
        new_status = status_on_flag(post["status"])
        if new_status != post["status"]:
            post["status"] = str(new_status)
            store.set(POSTS, posts)
            logger.info("Post %s reported by %s, now under review", post_id, user_id)
    return record


def moderate_post(
    store: RecordStore, post_id: str, new_status: str, admin_id: str
) -> dict:
    """Admin decision: set the post to ``approved`` or ``rejected`` from any
    state.  Returns the updated post.
    """
    _require_admin(store, admin_id)
    posts = store.get(POSTS, [])
    post = _find_post(posts, post_id)
    try:
        decision = status_on_moderate(post["status"], new_status)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    old_status = post["status"]
    post["status"] = decision.value
    store.set(POSTS, posts)
    logger.info(
        "Post %s moderated by %s: %s → %s", post_id, admin_id, old_status, decision
    )
    return post
