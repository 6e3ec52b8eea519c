"""Main CacheService combining all cache operations."""

from luma.services.cache.activity import ActivityCacheMixin
from luma.services.cache.comments import CommentCacheMixin
from luma.services.cache.posts import PostCacheMixin
from luma.services.cache.profiles import ProfileCacheMixin
from luma.services.cache.users import UserCacheMixin


class CacheService(
    PostCacheMixin,
    ProfileCacheMixin,
    CommentCacheMixin,
    ActivityCacheMixin,
    UserCacheMixin,
):
    """TTL cache over the persistent key-value store.

    Combines all cache operations through multiple inheritance:
    - BaseCacheOperations: get/set/remove/clear/invalidate/wrapper engine
    - PostCacheMixin: post lists, single posts, user and liked posts
    - ProfileCacheMixin: profile lists and single profiles
    - CommentCacheMixin: post, profile and user comments
    - ActivityCacheMixin: notifications, conversations, message threads
    - UserCacheMixin: user profile/settings and per-user flush
    """
    pass


# Global cache service instance
_cache_service: CacheService | None = None


def get_cache_service() -> CacheService:
    """Get or create the global cache service instance."""
    global _cache_service

    if _cache_service is None:
        _cache_service = CacheService()

    return _cache_service


async def close_cache_service() -> None:
    """Close the global instance's store and forget it."""
    global _cache_service

    if _cache_service is not None:
        await _cache_service.store.close()
        _cache_service = None
