"""Health check endpoints."""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from luma.api.deps import Cache
from luma.api.schemas import HealthResponse, ServiceHealth
from luma.core.config import get_settings
from luma.services.storage import MemoryKeyValueStore

router = APIRouter(tags=["Health"])


def _store_details(cache: Any) -> dict[str, Any]:
    if isinstance(cache.store, MemoryKeyValueStore):
        return {"type": "memory"}
    return {"type": "redis", "provider": "upstash"}


async def _timed_store_check(cache: Any) -> tuple[bool, float]:
    """Ping the store and measure latency in milliseconds."""
    start = time.perf_counter()
    healthy = await cache.check_health()
    return healthy, (time.perf_counter() - start) * 1000


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(cache: Cache) -> HealthResponse:
    """
    Report the health of the persistent store behind the cache.

    A failing store degrades the service instead of failing it, because
    cache failures only ever cost an extra remote fetch.
    """
    settings = get_settings()
    healthy, latency = await _timed_store_check(cache)

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        services={
            "store": ServiceHealth(
                status="healthy" if healthy else "degraded",
                latency_ms=round(latency, 2),
                details=_store_details(cache),
            )
        },
    )


@router.get(
    "/health/live",
    summary="Liveness probe",
)
async def liveness() -> dict[str, str]:
    """Returns 200 while the process is running."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/health/cache",
    summary="Cache store health check",
)
async def cache_health(cache: Cache) -> JSONResponse:
    """Check store connectivity, latency and entry count."""
    healthy, latency = await _timed_store_check(cache)
    stats = await cache.stats()

    response_data: dict[str, Any] = {
        "service": "cache",
        **_store_details(cache),
        "status": "healthy" if healthy else "degraded",
        "latency_ms": round(latency, 2),
        "entries": stats.total_entries,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    # Cache is optional, degraded is OK
    return JSONResponse(status_code=status.HTTP_200_OK, content=response_data)
