"""Persisted cache entry and diagnostics models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """Serialized form of a cached value.

    Persisted as ``{"data": ..., "timestamp": <ms epoch>, "ttl": <ms>}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Any = None
    stored_at: int = Field(alias="timestamp", ge=0)
    ttl_ms: int = Field(alias="ttl", ge=0)

    def age_ms(self, now: int) -> int:
        return now - self.stored_at

    def is_fresh(self, now: int) -> bool:
        """Fresh while the age does not exceed the TTL stored with the entry."""
        return self.age_ms(now) <= self.ttl_ms

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class CacheStats(BaseModel):
    """Cache entry counts grouped by resource tag."""

    total_entries: int = 0
    entries: dict[str, int] = Field(default_factory=dict)
