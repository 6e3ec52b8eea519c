"""Operator cache endpoints: diagnostics and manual invalidation."""

from fastapi import APIRouter, Query

from luma.api.deps import AdminOnly, Cache
from luma.api.schemas import CacheClearResponse, CacheStatsResponse
from luma.core.logging import get_logger
from luma.services.cache import ResourceClass

logger = get_logger(__name__)

router = APIRouter(prefix="/cache", tags=["Cache"], dependencies=[AdminOnly])


@router.get(
    "/stats",
    response_model=CacheStatsResponse,
    summary="Cache statistics",
)
async def cache_stats(cache: Cache) -> CacheStatsResponse:
    """Count cached entries, grouped by resource class."""
    stats = await cache.stats()
    return CacheStatsResponse(
        total_entries=stats.total_entries,
        entries=stats.entries,
        namespace=cache.namespace,
    )


@router.delete(
    "",
    response_model=CacheClearResponse,
    summary="Clear the cache",
)
async def clear_cache(
    cache: Cache,
    pattern: str | None = Query(default=None, min_length=1, description="Substring of keys to remove"),
) -> CacheClearResponse:
    """
    Remove cache entries.

    Without `pattern` every entry in the cache namespace is removed; entries
    outside the namespace are never touched.
    """
    removed = await cache.clear(pattern)
    logger.info("Operator cache clear", pattern=pattern, removed=removed)
    return CacheClearResponse(removed=removed, pattern=pattern)


@router.delete(
    "/{resource}",
    response_model=CacheClearResponse,
    summary="Invalidate one resource class",
)
async def invalidate_resource(resource: ResourceClass, cache: Cache) -> CacheClearResponse:
    """Remove every entry of one resource class (e.g. all post lists)."""
    pattern = cache.keys.pattern(resource)
    removed = await cache.invalidate(pattern)
    logger.info("Operator cache invalidation", resource=resource.value, removed=removed)
    return CacheClearResponse(removed=removed, pattern=str(pattern))
