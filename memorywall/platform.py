"""
memorywall.platform — The Public Operation Surface
===================================================

:class:`MemoryWall` is the async facade a UI or API layer talks to.  It owns
no state of its own beyond the injected :class:`RecordStore` and config:
every method ships the matching synchronous service function to a worker
thread through :func:`run_db`, holding the store lock for the whole call so
concurrent operations on one facade never interleave their read-modify-write
cycles.

Usage::

    engine = create_db_engine()
    init_db(engine)
    wall = MemoryWall(RecordStore(engine))
    await wall.seed()

    me = await wall.sign_in("rahul@college.edu", "secret1")
    post_id = await wall.create_post(
        title="Hello", content="First post", tags=["#coding"],
        category="General", author_id=me["id"],
    )
    unsubscribe = await wall.subscribe_channel("general", print)
    ...
    unsubscribe.cancel()
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any, TypeVar

from memorywall.config import MemoryWallConfig
from memorywall.database.engine import run_db
from memorywall.database.seed import seed_reference_data
from memorywall.database.store import RecordStore
from memorywall.engine.moderation import PostStatus
from memorywall.services import (
    channel_service,
    event_service,
    identity_service,
    post_service,
    recommendation_service,
    stats_service,
)
from memorywall.services.polling import Callback, Subscription, watch_channel, watch_session

T = TypeVar("T")


class MemoryWall:
    """Async facade over the record store and its services."""

    def __init__(
        self,
        store: RecordStore,
        cfg: MemoryWallConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.cfg = cfg or MemoryWallConfig()
        self._rng = rng

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a service function on a worker thread under the store lock."""
        return await run_db(self.store.atomically, func, *args, **kwargs)

    async def seed(self) -> bool:
        """One-time reference data load; no-op on an already seeded medium."""
        return await self._call(seed_reference_data, self.store)

    # -------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------
    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        return await self._call(identity_service.sign_in, self.store, self.cfg, email, password)

    async def register(
        self, email: str, password: str, name: str, branch: str, batch: str
    ) -> dict[str, Any]:
        return await self._call(
            identity_service.register, self.store, self.cfg,
            email, password, name, branch, batch, rng=self._rng,
        )

    async def sign_out(self) -> None:
        await self._call(identity_service.sign_out, self.store)

    async def current_user(self) -> dict | None:
        return await self._call(identity_service.current_user, self.store)

    async def on_session_change(self, callback: Callback) -> Subscription:
        return await watch_session(self.store, callback, self.cfg.session_poll_seconds)

    async def get_user(self, user_id: str) -> dict | None:
        return await self._call(identity_service.get_user, self.store, user_id)

    async def update_profile(self, user_id: str, **updates: Any) -> dict:
        return await self._call(identity_service.update_profile, self.store, user_id, **updates)

    # -------------------------------------------------------------------
    # Posts & moderation
    # -------------------------------------------------------------------
    async def list_posts(
        self,
        *,
        status: str = PostStatus.APPROVED,
        limit: int | None = None,
        author_id: str | None = None,
    ) -> list[dict]:
        return await self._call(
            post_service.list_posts, self.store,
            status=status,
            limit=self.cfg.post_list_limit if limit is None else limit,
            author_id=author_id,
        )

    async def create_post(
        self,
        *,
        title: str,
        content: str,
        tags: list[str],
        category: str,
        emoji: str | None = None,
        author_id: str,
    ) -> str:
        return await self._call(
            post_service.create_post, self.store, self.cfg,
            title=title, content=content, tags=tags,
            category=category, emoji=emoji, author_id=author_id,
        )

    async def toggle_like(self, post_id: str, user_id: str) -> dict[str, Any]:
        return await self._call(post_service.toggle_like, self.store, post_id, user_id)

    async def toggle_clap(self, post_id: str, user_id: str) -> dict[str, Any]:
        return await self._call(post_service.toggle_clap, self.store, post_id, user_id)

    async def flag_post(self, post_id: str, user_id: str, reason: str) -> dict:
        return await self._call(post_service.flag_post, self.store, post_id, user_id, reason)

    async def moderate_post(self, post_id: str, new_status: str, admin_id: str) -> dict:
        return await self._call(post_service.moderate_post, self.store, post_id, new_status, admin_id)

    async def moderation_queue(self, admin_id: str) -> list[dict]:
        return await self._call(post_service.moderation_queue, self.store, admin_id)

    # -------------------------------------------------------------------
    # Channels
    # -------------------------------------------------------------------
    async def list_messages(self, channel_id: str) -> list[dict]:
        return await self._call(channel_service.list_messages, self.store, channel_id)

    async def send_message(self, channel_id: str, text: str, user_id: str) -> dict:
        return await self._call(
            channel_service.send_message, self.store, self.cfg, channel_id, text, user_id
        )

    async def subscribe_channel(self, channel_id: str, callback: Callback) -> Subscription:
        return await watch_channel(
            self.store, channel_id, callback, self.cfg.channel_poll_seconds
        )

    # -------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------
    async def list_events(self) -> list[dict]:
        return await self._call(event_service.list_events, self.store)

    async def register_event(self, event_id: str, user_id: str) -> bool:
        return await self._call(event_service.register_for_event, self.store, event_id, user_id)

    # -------------------------------------------------------------------
    # Recommendations & stats
    # -------------------------------------------------------------------
    async def recommend_events(self, user_id: str) -> list[dict]:
        return await self._call(
            recommendation_service.event_recommendations, self.store, user_id, rng=self._rng
        )

    async def recommend_skills(self, user_id: str) -> list[dict]:
        return await self._call(recommendation_service.skill_suggestions, self.store, user_id)

    async def platform_stats(self) -> dict[str, int]:
        return await self._call(stats_service.platform_stats, self.store)
