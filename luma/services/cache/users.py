"""User account cache operations."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from luma.services.cache.base import BaseCacheOperations
from luma.services.cache.constants import ResourceClass

Fetch = Callable[[], Awaitable[Any]]


class UserCacheMixin(BaseCacheOperations):
    """Per-user profile and settings caching."""

    async def get_user_profile(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.user_profile(user_id), fetch_fn, force_refresh=force_refresh)

    async def get_user_settings(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.user_settings(user_id), fetch_fn, force_refresh=force_refresh)

    async def invalidate_user(self, user_id: str) -> None:
        """Drop every cache entry scoped to one user (e.g. on logout)."""
        keys = [
            self.keys.user_profiles(user_id),
            self.keys.user_posts(user_id),
            self.keys.liked_posts(user_id),
            self.keys.user_comments(user_id),
            self.keys.conversations(user_id),
            self.keys.user_profile(user_id),
            self.keys.user_settings(user_id),
        ]
        await asyncio.gather(
            *(self.remove(key) for key in keys),
            self.invalidate(self.keys.pattern(ResourceClass.NOTIFICATIONS, user_id)),
        )
