"""Notification and messaging cache operations."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from luma.services.cache.base import BaseCacheOperations
from luma.services.cache.constants import DEFAULT_LIMIT, ResourceClass

Fetch = Callable[[], Awaitable[Any]]


class ActivityCacheMixin(BaseCacheOperations):
    """Notifications, conversations and message threads."""

    # ========== Notifications ==========

    async def get_notifications(
        self,
        user_id: str,
        fetch_fn: Fetch,
        force_refresh: bool = False,
        limit: int = DEFAULT_LIMIT,
    ) -> Any:
        key = self.keys.notifications(user_id, limit)
        return await self.wrapper(key, fetch_fn, force_refresh=force_refresh)

    async def invalidate_notifications(self, user_id: str | None = None) -> int:
        """Invalidate one user's notification lists (every limit), or everyone's."""
        if user_id:
            pattern = self.keys.pattern(ResourceClass.NOTIFICATIONS, user_id)
        else:
            pattern = self.keys.pattern(ResourceClass.NOTIFICATIONS)
        return await self.invalidate(pattern)

    # ========== Messaging ==========

    async def get_conversations(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.conversations(user_id), fetch_fn, force_refresh=force_refresh)

    async def get_messages(
        self,
        user_a: str,
        user_b: str,
        fetch_fn: Fetch,
        force_refresh: bool = False,
    ) -> Any:
        key = self.keys.messages(user_a, user_b)
        return await self.wrapper(key, fetch_fn, force_refresh=force_refresh)

    async def invalidate_thread(self, participants: list[str]) -> None:
        """Invalidate a thread and each participant's conversations.

        Without exactly two distinct participants the thread cannot be named,
        so every cached thread is dropped instead.
        """
        users = list(dict.fromkeys(participants))
        keys = [self.keys.conversations(user_id) for user_id in users]
        if len(users) == 2:
            keys.append(self.keys.messages(*users))
            await asyncio.gather(*(self.remove(key) for key in keys))
            return

        await asyncio.gather(
            *(self.remove(key) for key in keys),
            self.invalidate(self.keys.pattern(ResourceClass.MESSAGES)),
        )
