"""Profile cache operations."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from luma.services.cache.base import BaseCacheOperations
from luma.services.cache.constants import ResourceClass

Fetch = Callable[[], Awaitable[Any]]


class ProfileCacheMixin(BaseCacheOperations):
    """Profile caching operations."""

    async def get_profiles(self, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.profiles(), fetch_fn, force_refresh=force_refresh)

    async def get_profile(self, profile_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.profile(profile_id), fetch_fn, force_refresh=force_refresh)

    async def get_user_profiles(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.user_profiles(user_id), fetch_fn, force_refresh=force_refresh)

    async def invalidate_profile_lists(self) -> None:
        """Invalidate the all-profiles list and every user's profile list."""
        await asyncio.gather(
            self.remove(self.keys.profiles()),
            self.invalidate(self.keys.pattern(ResourceClass.USER_PROFILES)),
        )

    async def invalidate_profile(self, profile_id: str) -> None:
        """Invalidate a profile, the lists containing it and its comments."""
        await asyncio.gather(
            self.remove(self.keys.profile(profile_id)),
            self.remove(self.keys.profile_comments(profile_id)),
            self.invalidate_profile_lists(),
        )
