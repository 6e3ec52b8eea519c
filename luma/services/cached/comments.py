"""Cached comment service."""

from typing import Any

from luma.services.cache import CacheService, get_cache_service
from luma.services.remote import CommentDataService


class CachedCommentService:
    """Comment reads through the cache.

    Comment edits and deletes only carry the comment id, so they drop every
    cached comment list.
    """

    def __init__(self, remote: CommentDataService, cache: CacheService | None = None) -> None:
        self._remote = remote
        self._cache = cache if cache is not None else get_cache_service()

    async def get_post_comments(self, post_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_post_comments(
            post_id, lambda: self._remote.get_post_comments(post_id), force_refresh
        )

    async def get_profile_comments(self, profile_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_profile_comments(
            profile_id, lambda: self._remote.get_profile_comments(profile_id), force_refresh
        )

    async def get_user_comments(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_user_comments(
            user_id, lambda: self._remote.get_user_comments(user_id), force_refresh
        )

    async def create_comment(self, comment_data: dict[str, Any]) -> Any:
        """Create a comment on a post or a profile.

        ``comment_data`` may carry ``post_id``, ``profile_id`` and the author's
        ``user_id``; a comment with no target drops all comment lists.
        """
        author_id = comment_data.get("user_id")
        author_comments = self._cache.keys.user_comments(author_id) if author_id else None

        result = await self._remote.create_comment(comment_data)
        await self._cache.invalidate_comments(
            post_id=comment_data.get("post_id"),
            profile_id=comment_data.get("profile_id"),
        )
        if author_comments is not None:
            await self._cache.remove(author_comments)
        return result

    async def update_comment(self, comment_id: str, update_data: dict[str, Any]) -> Any:
        result = await self._remote.update_comment(comment_id, update_data)
        await self._cache.invalidate_comments()
        return result

    async def delete_comment(self, comment_id: str) -> Any:
        result = await self._remote.delete_comment(comment_id)
        await self._cache.invalidate_comments()
        return result
