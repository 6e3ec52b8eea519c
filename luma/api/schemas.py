"""API request/response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    """Cache entry counts by resource class."""

    total_entries: int = Field(..., ge=0)
    entries: dict[str, int] = Field(default_factory=dict)
    namespace: str


class CacheClearResponse(BaseModel):
    """Result of an operator cache clear or invalidation."""

    removed: int = Field(..., ge=0)
    pattern: str | None = None


class ServiceHealth(BaseModel):
    """Individual service health status."""

    status: str
    latency_ms: float | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    services: dict[str, ServiceHealth] = Field(default_factory=dict)
