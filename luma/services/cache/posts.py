"""Post cache operations."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from luma.services.cache.base import BaseCacheOperations
from luma.services.cache.constants import DEFAULT_LIMIT, ResourceClass

Fetch = Callable[[], Awaitable[Any]]


class PostCacheMixin(BaseCacheOperations):
    """Post list, single post and per-user post caching."""

    async def get_posts(
        self,
        category: str | None,
        sort_by: str | None,
        fetch_fn: Fetch,
        force_refresh: bool = False,
        limit: int = DEFAULT_LIMIT,
    ) -> Any:
        """Get a post list for one category/sort combination."""
        key = self.keys.posts(category, sort_by, limit)
        return await self.wrapper(key, fetch_fn, force_refresh=force_refresh)

    async def get_post(self, post_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        key = self.keys.post(post_id)
        return await self.wrapper(key, fetch_fn, force_refresh=force_refresh)

    async def get_user_posts(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        key = self.keys.user_posts(user_id)
        return await self.wrapper(key, fetch_fn, force_refresh=force_refresh)

    async def get_liked_posts(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        key = self.keys.liked_posts(user_id)
        return await self.wrapper(key, fetch_fn, force_refresh=force_refresh)

    async def invalidate_post_lists(self) -> int:
        """Invalidate every post list, across all categories and sort orders."""
        return await self.invalidate(self.keys.pattern(ResourceClass.POSTS))

    async def invalidate_post(self, post_id: str) -> None:
        """Invalidate a post together with every list that may embed it."""
        await asyncio.gather(
            self.remove(self.keys.post(post_id)),
            self.invalidate_post_lists(),
            self.invalidate(self.keys.pattern(ResourceClass.USER_POSTS)),
        )
