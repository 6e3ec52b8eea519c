"""Test configuration and fixtures.

Provides isolated test fixtures for:
- A controllable millisecond clock
- An in-memory key-value store and a cache service bound to both
- Mock remote data services
- HTTP client with the cache dependency overridden
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from luma.main import app
from luma.services.cache import CacheService, get_cache_service
from luma.services.storage import MemoryKeyValueStore

START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = START_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


# =============================================================================
# Cache Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def cache(store: MemoryKeyValueStore, clock: FakeClock) -> CacheService:
    return CacheService(store=store, clock=clock)


# =============================================================================
# Mock Remote Services
# =============================================================================

def _remote(**methods: object) -> MagicMock:
    mock = MagicMock()
    for name, value in methods.items():
        setattr(mock, name, AsyncMock(return_value=value))
    return mock


@pytest.fixture
def post_remote() -> MagicMock:
    return _remote(
        get_posts=[{"id": "p1", "title": "First"}],
        get_post={"id": "p1", "title": "First"},
        get_user_posts=[{"id": "p1"}],
        get_liked_posts=[{"id": "p1"}],
        create_post="p2",
        update_post=None,
        delete_post=None,
        like_post=None,
        unlike_post=None,
        search_posts=[{"id": "p1"}],
    )


@pytest.fixture
def profile_remote() -> MagicMock:
    return _remote(
        get_profiles=[{"id": "pr1"}],
        get_profile={"id": "pr1", "name": "Sam"},
        get_user_profiles=[{"id": "pr1"}],
        create_profile="pr2",
        update_profile=None,
        delete_profile=None,
    )


@pytest.fixture
def comment_remote() -> MagicMock:
    return _remote(
        get_post_comments=[{"id": "c1"}],
        get_profile_comments=[{"id": "c2"}],
        get_user_comments=[{"id": "c1"}],
        create_comment="c3",
        update_comment=None,
        delete_comment=None,
    )


@pytest.fixture
def notification_remote() -> MagicMock:
    return _remote(
        get_user_notifications=[{"id": "n1", "read": False}],
        mark_notification_as_read=None,
        mark_all_notifications_as_read=None,
        create_notification="n2",
    )


@pytest.fixture
def message_remote() -> MagicMock:
    return _remote(
        get_user_conversations=[{"id": "m1"}],
        get_messages=[{"id": "m1", "text": "hi"}],
        create_message="m2",
    )


@pytest.fixture
def user_remote() -> MagicMock:
    return _remote(
        get_user_profile={"id": "u1", "displayName": "Sam"},
        update_user_profile=None,
        get_user_settings={"notifications": True},
        update_user_settings=None,
    )


# =============================================================================
# HTTP Client Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def client(cache: CacheService) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client backed by the in-memory cache."""
    app.dependency_overrides[get_cache_service] = lambda: cache

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
