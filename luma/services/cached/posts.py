"""Cached post service."""

import asyncio
from typing import Any

from luma.core.logging import get_logger
from luma.services.cache import CacheKey, CacheService, ResourceClass, get_cache_service
from luma.services.cache.constants import DEFAULT_LIMIT, DEFAULT_SORT
from luma.services.remote import PostDataService

logger = get_logger(__name__)


class CachedPostService:
    """Post reads through the cache, post writes with list invalidation.

    Invalidation is deliberately coarse: any post write drops every post list
    instead of working out which lists the post belongs to.
    """

    def __init__(self, remote: PostDataService, cache: CacheService | None = None) -> None:
        self._remote = remote
        self._cache = cache if cache is not None else get_cache_service()

    # ========== Reads ==========

    async def get_posts(
        self,
        category: str | None = None,
        sort_by: str = DEFAULT_SORT,
        limit: int = DEFAULT_LIMIT,
        force_refresh: bool = False,
    ) -> Any:
        return await self._cache.get_posts(
            category,
            sort_by,
            lambda: self._remote.get_posts(category, sort_by, limit),
            force_refresh,
            limit=limit,
        )

    async def get_post(self, post_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_post(
            post_id, lambda: self._remote.get_post(post_id), force_refresh
        )

    async def get_user_posts(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_user_posts(
            user_id, lambda: self._remote.get_user_posts(user_id), force_refresh
        )

    async def get_liked_posts(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_liked_posts(
            user_id, lambda: self._remote.get_liked_posts(user_id), force_refresh
        )

    async def search_posts(self, query: str) -> Any:
        """Search is never cached: results depend on the query and are rarely reused."""
        return await self._remote.search_posts(query)

    # ========== Writes ==========

    async def create_post(self, post_data: dict[str, Any], user_id: str) -> Any:
        author_posts = self._cache.keys.user_posts(user_id)
        result = await self._remote.create_post(post_data, user_id)
        await asyncio.gather(
            self._cache.invalidate_post_lists(),
            self._cache.remove(author_posts),
        )
        logger.debug("Post lists invalidated after create", user_id=user_id)
        return result

    async def update_post(self, post_id: str, update_data: dict[str, Any]) -> Any:
        self._cache.keys.post(post_id)  # reject a bad id before the write
        result = await self._remote.update_post(post_id, update_data)
        await self._invalidate_everywhere(post_id)
        return result

    async def delete_post(self, post_id: str) -> Any:
        self._cache.keys.post(post_id)  # reject a bad id before the write
        result = await self._remote.delete_post(post_id)
        await asyncio.gather(
            self._invalidate_everywhere(post_id),
            self._cache.invalidate_comments(post_id=post_id),
        )
        return result

    async def like_post(self, post_id: str, user_id: str) -> Any:
        liked = self._like_keys(post_id, user_id)
        result = await self._remote.like_post(post_id, user_id)
        await self._invalidate_like(post_id, liked)
        return result

    async def unlike_post(self, post_id: str, user_id: str) -> Any:
        liked = self._like_keys(post_id, user_id)
        result = await self._remote.unlike_post(post_id, user_id)
        await self._invalidate_like(post_id, liked)
        return result

    async def _invalidate_everywhere(self, post_id: str) -> None:
        # Edits and deletes reach every liked-posts list that embeds the post
        await asyncio.gather(
            self._cache.invalidate_post(post_id),
            self._cache.invalidate(self._cache.keys.pattern(ResourceClass.LIKED_POSTS)),
        )
        logger.debug("Post invalidated", post_id=post_id)

    def _like_keys(self, post_id: str, user_id: str) -> CacheKey:
        """Check both ids and return the liker's liked-posts key."""
        self._cache.keys.post(post_id)
        return self._cache.keys.liked_posts(user_id)

    async def _invalidate_like(self, post_id: str, liked: CacheKey) -> None:
        # Only the liking user's liked-posts list changes
        await asyncio.gather(
            self._cache.invalidate_post(post_id),
            self._cache.remove(liked),
        )
