"""Comment cache operations."""

from collections.abc import Awaitable, Callable
from typing import Any

from luma.services.cache.base import BaseCacheOperations
from luma.services.cache.constants import ResourceClass

Fetch = Callable[[], Awaitable[Any]]


class CommentCacheMixin(BaseCacheOperations):
    """Comment caching operations, scoped by post, profile or author."""

    async def get_post_comments(self, post_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.post_comments(post_id), fetch_fn, force_refresh=force_refresh)

    async def get_profile_comments(
        self, profile_id: str, fetch_fn: Fetch, force_refresh: bool = False
    ) -> Any:
        return await self.wrapper(
            self.keys.profile_comments(profile_id), fetch_fn, force_refresh=force_refresh
        )

    async def get_user_comments(self, user_id: str, fetch_fn: Fetch, force_refresh: bool = False) -> Any:
        return await self.wrapper(self.keys.user_comments(user_id), fetch_fn, force_refresh=force_refresh)

    async def invalidate_comments(
        self,
        post_id: str | None = None,
        profile_id: str | None = None,
    ) -> None:
        """Invalidate one post's and/or one profile's comments; all comments if neither given."""
        if post_id:
            await self.remove(self.keys.post_comments(post_id))
        if profile_id:
            await self.remove(self.keys.profile_comments(profile_id))
        if not post_id and not profile_id:
            await self.invalidate(self.keys.pattern(ResourceClass.COMMENTS))
