"""Tests for luma.services.storage: memory and Upstash stores, backend selection."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from luma.core.config import Settings
from luma.core.exceptions import StorageError
from luma.services.storage import (
    KeyValueStore,
    MemoryKeyValueStore,
    UpstashKeyValueStore,
    create_store,
)


# =============================================================================
# MemoryKeyValueStore
# =============================================================================

class TestMemoryStore:

    async def test_set_get_remove(self):
        store = MemoryKeyValueStore()
        await store.set_item("k", "v")
        assert await store.get_item("k") == "v"

        await store.remove_item("k")
        assert await store.get_item("k") is None

    async def test_remove_missing_is_noop(self):
        store = MemoryKeyValueStore()
        await store.remove_item("missing")
        await store.multi_remove(["missing", "also-missing"])
        assert len(store) == 0

    async def test_multi_remove_and_keys(self):
        store = MemoryKeyValueStore({"a": "1", "b": "2", "c": "3"})
        await store.multi_remove(["a", "c"])
        assert await store.get_all_keys() == ["b"]
        assert "b" in store

    async def test_keys_filtered_by_prefix(self):
        store = MemoryKeyValueStore({"cache:post:p1": "1", "session:token": "2"})
        assert await store.get_all_keys("cache:") == ["cache:post:p1"]

    def test_satisfies_protocol(self):
        assert isinstance(MemoryKeyValueStore(), KeyValueStore)


# =============================================================================
# UpstashKeyValueStore
# =============================================================================

@pytest.fixture
def redis_client() -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value='{"data":1}')
    client.set = AsyncMock(return_value="OK")
    client.delete = AsyncMock(return_value=1)
    client.keys = AsyncMock(return_value=["cache:post:p1"])
    client.ping = AsyncMock(return_value="PONG")
    client.close = AsyncMock()
    return client


@pytest.fixture
def upstash(redis_client: MagicMock) -> UpstashKeyValueStore:
    return UpstashKeyValueStore("https://example.upstash.io", "token", client=redis_client)


class TestUpstashStore:

    async def test_delegates_to_client(self, upstash: UpstashKeyValueStore, redis_client: MagicMock):
        assert await upstash.get_item("k") == '{"data":1}'
        await upstash.set_item("k", "v")
        await upstash.remove_item("k")
        await upstash.multi_remove(["a", "b"])

        redis_client.set.assert_awaited_once_with("k", "v")
        redis_client.delete.assert_any_await("k")
        redis_client.delete.assert_any_await("a", "b")

    async def test_missing_key(self, upstash: UpstashKeyValueStore, redis_client: MagicMock):
        redis_client.get.return_value = None
        assert await upstash.get_item("k") is None

    async def test_empty_multi_remove_skips_client(
        self, upstash: UpstashKeyValueStore, redis_client: MagicMock
    ):
        await upstash.multi_remove([])
        redis_client.delete.assert_not_awaited()

    async def test_keys_and_ping(self, upstash: UpstashKeyValueStore, redis_client: MagicMock):
        assert await upstash.get_all_keys() == ["cache:post:p1"]
        assert await upstash.ping() is True
        redis_client.keys.assert_awaited_once_with("*")

    @pytest.mark.parametrize(
        "prefix, glob",
        [("cache:", "cache:*"), ("c*[1]?:", "c\\*\\[1\\]\\?:*")],
        ids=["namespace", "escaped"],
    )
    async def test_keys_scoped_to_prefix(
        self, upstash: UpstashKeyValueStore, redis_client: MagicMock, prefix: str, glob: str
    ):
        await upstash.get_all_keys(prefix)
        redis_client.keys.assert_awaited_once_with(glob)

    @pytest.mark.parametrize(
        "method, args, client_attr",
        [
            ("get_item", ("k",), "get"),
            ("set_item", ("k", "v"), "set"),
            ("remove_item", ("k",), "delete"),
            ("multi_remove", (["a"],), "delete"),
            ("get_all_keys", (), "keys"),
            ("ping", (), "ping"),
        ],
    )
    async def test_errors_wrapped(
        self,
        upstash: UpstashKeyValueStore,
        redis_client: MagicMock,
        method: str,
        args: tuple,
        client_attr: str,
    ):
        getattr(redis_client, client_attr).side_effect = ConnectionError("network down")

        with pytest.raises(StorageError) as exc_info:
            await getattr(upstash, method)(*args)

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    async def test_close_swallows_errors(self, upstash: UpstashKeyValueStore, redis_client: MagicMock):
        redis_client.close.side_effect = RuntimeError("already closed")
        await upstash.close()


# =============================================================================
# create_store
# =============================================================================

class TestCreateStore:

    def test_memory_by_default(self):
        assert isinstance(create_store(Settings()), MemoryKeyValueStore)

    def test_redis_without_credentials_falls_back(self):
        settings = Settings(storage_backend="redis")
        assert isinstance(create_store(settings), MemoryKeyValueStore)

    def test_redis_with_credentials(self):
        settings = Settings(
            storage_backend="redis",
            upstash_redis_rest_url="https://example.upstash.io",
            upstash_redis_rest_token="token",
        )
        assert isinstance(create_store(settings), UpstashKeyValueStore)
