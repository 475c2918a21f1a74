"""
memorywall.services.polling — Poll-Based Change Notification
=============================================================

The record store has no push channel, so "real-time" updates are simulated
by re-reading on a fixed interval.  Observers may see a change up to one
interval after it was written.

Every watcher returns a :class:`Subscription`; call ``cancel()`` to stop
polling.  Nothing cleans up a leaked handle automatically.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from memorywall.database.engine import run_db
from memorywall.database.store import RecordStore
from memorywall.services.channel_service import list_messages
from memorywall.services.identity_service import get_user, session_pointer

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


async def invoke_callback(callback: Callback, *args: Any) -> None:
    """Call *callback*, awaiting it if it is a coroutine function."""
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Subscription:
    """Background task that runs *check* every *interval* seconds.

    Errors raised by *check* (including the subscriber's callback) are
    logged and polling continues.
    """

    def __init__(
        self,
        check: Callable[[], Awaitable[None]],
        interval: float,
        *,
        name: str = "poll",
    ) -> None:
        self.interval = interval
        self.name = name
        self._check = check
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start polling on the running event loop."""
        if self._task is not None:
            return

        async def _poll_loop() -> None:
            while True:
                await asyncio.sleep(self.interval)
                try:
                    await self._check()
                except Exception:
                    logger.exception("Poll check failed (%s)", self.name)

        self._task = asyncio.get_running_loop().create_task(_poll_loop(), name=self.name)

    def cancel(self) -> None:
        """Stop polling.  Safe to call more than once."""
        if self._task:
            self._task.cancel()
            self._task = None

    __call__ = cancel


# ---------------------------------------------------------------------------
# Watchers
# ---------------------------------------------------------------------------
async def watch_session(
    store: RecordStore, callback: Callback, interval: float
) -> Subscription:
    """Call *callback(user)* now, then whenever the session pointer changes.

    Changes written by another actor sharing the medium are picked up on
    the next poll.
    """
    last = await run_db(session_pointer, store)
    await invoke_callback(callback, await run_db(get_user, store, last))

    async def check() -> None:
        nonlocal last
        pointer = await run_db(session_pointer, store)
        if pointer == last:
            return
        last = pointer
        await invoke_callback(callback, await run_db(get_user, store, pointer))

    subscription = Subscription(check, interval, name="session-watch")
    subscription.start()
    return subscription


async def watch_channel(
    store: RecordStore, channel_id: str, callback: Callback, interval: float
) -> Subscription:
    """Call *callback(messages)* whenever the channel's message count changes.

    Only the count is compared: an edit that keeps the length the same goes
    unnoticed.  The first check runs immediately against a count of zero,
    so an empty channel produces no initial callback.
    """
    last_count = 0

    async def check() -> None:
        nonlocal last_count
        messages = await run_db(list_messages, store, channel_id)
        if len(messages) != last_count:
            last_count = len(messages)
            await invoke_callback(callback, messages)

    await check()
    subscription = Subscription(check, interval, name=f"channel-watch:{channel_id}")
    subscription.start()
    return subscription
