"""Persistent key-value store adapters.

The cache engine only ever talks to a ``KeyValueStore``: durable,
string-keyed, string-valued storage without built-in expiry.

- ``MemoryKeyValueStore``: process-local dict, default backend and test double
- ``UpstashKeyValueStore``: Upstash Redis over REST (GET/SET/DEL/KEYS/PING)
"""

import re
from typing import Protocol, runtime_checkable

from upstash_redis.asyncio import Redis

from luma.core.config import Settings
from luma.core.exceptions import StorageError
from luma.core.logging import get_logger

logger = get_logger(__name__)


def _glob_escape(text: str) -> str:
    """Escape Redis KEYS glob metacharacters."""
    return re.sub(r"([\\*?\[\]])", r"\\\1", text)


@runtime_checkable
class KeyValueStore(Protocol):
    """Async contract consumed by the cache engine."""

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...

    async def multi_remove(self, keys: list[str]) -> None: ...

    async def get_all_keys(self, prefix: str = "") -> list[str]: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store living for the lifetime of the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def multi_remove(self, keys: list[str]) -> None:
        for key in keys:
            self._items.pop(key, None)

    async def get_all_keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._items if key.startswith(prefix)]

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class UpstashKeyValueStore:
    """Upstash Redis backed store.

    Every backend failure is re-raised as ``StorageError`` so callers see a
    single error type regardless of transport.
    """

    def __init__(self, url: str, token: str, client: Redis | None = None) -> None:
        self._client = client if client is not None else Redis(url=url, token=token)

    async def get_item(self, key: str) -> str | None:
        try:
            result = await self._client.get(key)
        except Exception as e:
            raise StorageError("get") from e
        return result if isinstance(result, str) else None

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self._client.set(key, value)
        except Exception as e:
            raise StorageError("set") from e

    async def remove_item(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except Exception as e:
            raise StorageError("delete") from e

    async def multi_remove(self, keys: list[str]) -> None:
        if not keys:
            return
        try:
            await self._client.delete(*keys)
        except Exception as e:
            raise StorageError("delete") from e

    async def get_all_keys(self, prefix: str = "") -> list[str]:
        try:
            keys = await self._client.keys(_glob_escape(prefix) + "*")
        except Exception as e:
            raise StorageError("keys") from e
        return list(keys or [])

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except Exception as e:
            raise StorageError("ping") from e

    async def close(self) -> None:
        try:
            await self._client.close()
        except Exception as e:
            logger.debug("Redis client close failed", error=str(e))


def create_store(settings: Settings) -> KeyValueStore:
    """Build the configured store, falling back to memory when Redis is unusable."""
    if settings.storage_backend == "redis":
        if settings.redis_available:
            try:
                store = UpstashKeyValueStore(
                    url=settings.upstash_redis_rest_url,
                    token=settings.upstash_redis_rest_token,
                )
                logger.info("Upstash Redis store initialized")
                return store
            except Exception as e:
                logger.warning("Failed to initialize Redis store", error=str(e))
        else:
            logger.warning("Redis store requested but credentials are not configured")

    logger.info("Using in-memory key-value store")
    return MemoryKeyValueStore()
