"""Services module exports."""

from luma.services.cache import CacheService, get_cache_service
from luma.services.cached import (
    CachedCommentService,
    CachedMessageService,
    CachedNotificationService,
    CachedPostService,
    CachedProfileService,
    CachedUserService,
)
from luma.services.storage import KeyValueStore, MemoryKeyValueStore, UpstashKeyValueStore

__all__ = [
    # Cache
    "CacheService",
    "get_cache_service",
    # Cached domain services
    "CachedCommentService",
    "CachedMessageService",
    "CachedNotificationService",
    "CachedPostService",
    "CachedProfileService",
    "CachedUserService",
    # Storage
    "KeyValueStore",
    "MemoryKeyValueStore",
    "UpstashKeyValueStore",
]
