"""TTL caching layer over a persistent key-value store.

Features:
- Fetch-or-populate wrapper with per-resource TTLs
- Stale-on-error fallback for non-forced reads
- Structured key registry with bulk invalidation by resource class
- Lazy expiry on access, no background sweep
- Store failures degrade to cache misses instead of errors
"""

from luma.services.cache.constants import (
    TTL_COMMENTS,
    TTL_DEFAULT,
    TTL_MESSAGES,
    TTL_NOTIFICATIONS,
    TTL_POSTS,
    TTL_PROFILES,
    TTL_USER_DATA,
    ResourceClass,
)
from luma.services.cache.keys import CacheKey, CacheKeys, KeyPattern
from luma.services.cache.models import CacheEntry, CacheStats
from luma.services.cache.service import CacheService, close_cache_service, get_cache_service

__all__ = [
    # TTL constants
    "TTL_DEFAULT",
    "TTL_POSTS",
    "TTL_PROFILES",
    "TTL_USER_DATA",
    "TTL_COMMENTS",
    "TTL_MESSAGES",
    "TTL_NOTIFICATIONS",
    # Keys
    "ResourceClass",
    "CacheKey",
    "CacheKeys",
    "KeyPattern",
    # Models
    "CacheEntry",
    "CacheStats",
    # Service
    "CacheService",
    "get_cache_service",
    "close_cache_service",
]
