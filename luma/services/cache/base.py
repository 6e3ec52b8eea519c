"""Base cache operations - TTL cache engine over a persistent key-value store."""

import asyncio
import inspect
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from luma.core.config import get_settings
from luma.core.exceptions import InvalidCacheKeyError
from luma.core.logging import get_logger
from luma.services.cache.constants import KEY_SEPARATOR, TTL_DEFAULT
from luma.services.cache.keys import CacheKey, CacheKeys, KeyPattern
from luma.services.cache.models import CacheEntry, CacheStats
from luma.services.storage import KeyValueStore, create_store

logger = get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], int]
CacheCallback = Callable[[Any], Any]
Pattern = KeyPattern | str | None


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class BaseCacheOperations:
    """TTL cache engine with fetch-or-populate and stale-on-error fallback.

    Expiry is checked lazily on read; there is no background sweep. Store and
    serialization failures are logged and never reach the caller.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        clock: Clock | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize the cache engine."""
        settings = get_settings()
        self._store: KeyValueStore = store if store is not None else create_store(settings)
        self._clock: Clock = clock or now_ms
        self.namespace = namespace or settings.cache_namespace
        self.keys = CacheKeys(self.namespace)
        self._health_timeout = settings.storage_health_timeout

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def _prefix(self) -> str:
        return self.namespace + KEY_SEPARATOR

    def _render(self, key: CacheKey | str) -> str:
        """Render a key, refusing anything outside the cache namespace."""
        raw = str(key)
        if not raw.startswith(self._prefix):
            raise InvalidCacheKeyError(raw, f"key must start with '{self._prefix}'")
        return raw

    @staticmethod
    def _resolve_ttl(key: CacheKey | str, ttl: int | None) -> int:
        if ttl is not None:
            return ttl
        if isinstance(key, CacheKey):
            return key.ttl
        return TTL_DEFAULT

    # ========== Entry I/O ==========

    async def _read_entry(self, raw_key: str) -> CacheEntry | None:
        """Read an entry regardless of age; malformed entries count as absent."""
        try:
            payload = await self._store.get_item(raw_key)
        except Exception as e:
            logger.warning("Cache read failed", key=raw_key, error=str(e))
            return None

        if payload is None:
            return None

        try:
            return CacheEntry.model_validate_json(payload)
        except PydanticValidationError as e:
            logger.warning("Cache entry malformed, treating as miss", key=raw_key, error=str(e))
            return None

    async def _lookup(self, raw_key: str, ttl: int | None, *, evict_expired: bool) -> Any | None:
        entry = await self._read_entry(raw_key)
        if entry is None:
            return None

        if ttl is not None and ttl != entry.ttl_ms:
            logger.warning(
                "Cache TTL mismatch, using stored TTL",
                key=raw_key,
                requested_ttl=ttl,
                stored_ttl=entry.ttl_ms,
            )

        if not entry.is_fresh(self._clock()):
            if evict_expired:
                await self.remove(raw_key)
            return None

        return entry.data

    async def get(self, key: CacheKey | str, ttl: int | None = None) -> Any | None:
        """Return the cached data if present and fresh, else ``None``.

        The TTL stored with the entry decides freshness. A caller-supplied TTL
        that disagrees with it is logged as a caller bug. Expired entries are
        removed from the store.
        """
        return await self._lookup(self._render(key), ttl, evict_expired=True)

    async def set(self, key: CacheKey | str, data: Any, ttl: int | None = None) -> bool:
        """Store ``data`` under ``key``, overwriting any prior entry."""
        raw_key = self._render(key)
        entry = CacheEntry(data=data, stored_at=self._clock(), ttl_ms=self._resolve_ttl(key, ttl))

        try:
            payload = entry.to_json()
        except (PydanticSerializationError, TypeError, ValueError) as e:
            logger.warning("Cache value not serializable", key=raw_key, error=str(e))
            return False

        try:
            await self._store.set_item(raw_key, payload)
            return True
        except Exception as e:
            logger.warning("Cache write failed", key=raw_key, error=str(e))
            return False

    async def remove(self, key: CacheKey | str) -> bool:
        """Delete an entry; absent keys are not an error."""
        raw_key = self._render(key)
        try:
            await self._store.remove_item(raw_key)
            return True
        except Exception as e:
            logger.warning("Cache remove failed", key=raw_key, error=str(e))
            return False

    # ========== Bulk invalidation ==========

    def _matches(self, raw_key: str, pattern: Pattern) -> bool:
        if pattern is None:
            return True
        if isinstance(pattern, KeyPattern):
            parsed = CacheKey.parse(raw_key, self.namespace)
            return parsed is not None and pattern.matches(parsed)
        return pattern in raw_key

    async def _remove_keys(self, keys: list[str]) -> int:
        """Remove keys in one batch, falling back to one-by-one on failure."""
        if not keys:
            return 0

        try:
            await self._store.multi_remove(keys)
            return len(keys)
        except Exception as e:
            logger.warning("Cache batch remove failed, removing keys individually", error=str(e))

        removed = 0
        for key in keys:
            try:
                await self._store.remove_item(key)
                removed += 1
            except Exception as e:
                logger.warning("Cache remove failed", key=key, error=str(e))
        return removed

    async def clear(self, pattern: Pattern = None) -> int:
        """Remove cache entries matching ``pattern`` and return how many went.

        ``None`` flushes every key in the cache namespace (never the whole
        store). A ``KeyPattern`` matches structurally; a string matches as a
        substring.
        """
        try:
            all_keys = await self._store.get_all_keys(self._prefix)
        except Exception as e:
            logger.warning("Cache key listing failed", error=str(e))
            return 0

        targets = [
            key
            for key in all_keys
            if key.startswith(self._prefix) and self._matches(key, pattern)
        ]
        removed = await self._remove_keys(targets)
        if removed:
            logger.info(
                "Cache entries cleared",
                pattern=str(pattern) if pattern is not None else None,
                removed=removed,
            )
        return removed

    async def invalidate(self, pattern: KeyPattern | str) -> int:
        """Mark everything matching ``pattern`` as stale by removing it."""
        return await self.clear(pattern)

    async def stats(self) -> CacheStats:
        """Count cache entries grouped by resource tag."""
        try:
            all_keys = await self._store.get_all_keys(self._prefix)
        except Exception as e:
            logger.warning("Cache stats failed", error=str(e))
            return CacheStats()

        entries: dict[str, int] = {}
        total = 0
        for key in all_keys:
            if not key.startswith(self._prefix):
                continue
            tag = key[len(self._prefix):].split(KEY_SEPARATOR, 1)[0] or "unknown"
            entries[tag] = entries.get(tag, 0) + 1
            total += 1
        return CacheStats(total_entries=total, entries=entries)

    # ========== Fetch-or-populate ==========

    @staticmethod
    async def _notify(callback: CacheCallback | None, data: Any) -> None:
        if callback is None:
            return
        result = callback(data)
        if inspect.isawaitable(result):
            await result

    async def wrapper(
        self,
        key: CacheKey | str,
        fetch_fn: Callable[[], Awaitable[T]],
        ttl: int | None = None,
        *,
        force_refresh: bool = False,
        on_cache_hit: CacheCallback | None = None,
        on_cache_miss: CacheCallback | None = None,
    ) -> T:
        """Return cached data for ``key`` or fetch, store and return it.

        On fetch failure a non-forced call serves any existing entry for the
        key, however old. A forced refresh always propagates the failure.
        Concurrent calls for one key are not coalesced; the last write wins.
        """
        raw_key = self._render(key)
        effective_ttl = self._resolve_ttl(key, ttl)

        if not force_refresh:
            # Expired entries stay in place as the stale fallback until replaced
            cached = await self._lookup(raw_key, effective_ttl, evict_expired=False)
            if cached is not None:
                await self._notify(on_cache_hit, cached)
                return cached  # type: ignore[no-any-return]

        try:
            data = await fetch_fn()
        except Exception as e:
            if not force_refresh:
                stale = await self._read_entry(raw_key)
                if stale is not None:
                    logger.warning(
                        "Serving stale cache after fetch failure",
                        key=raw_key,
                        age_ms=stale.age_ms(self._clock()),
                        error=str(e),
                    )
                    return stale.data  # type: ignore[no-any-return]
            raise

        if data is not None:
            await self.set(raw_key, data, effective_ttl)

        await self._notify(on_cache_miss, data)
        return data

    # ========== Health check ==========

    async def check_health(self, timeout: float | None = None) -> bool:
        """Check store connectivity with timeout."""
        timeout = timeout if timeout is not None else self._health_timeout
        try:
            return bool(await asyncio.wait_for(self._store.ping(), timeout=timeout))
        except asyncio.TimeoutError:
            logger.error("Store health check timed out", timeout=timeout)
            return False
        except Exception as e:
            logger.error("Store health check failed", error=str(e))
            return False
