"""Tests for CachedProfileService and CachedCommentService."""

from unittest.mock import MagicMock

import pytest

from luma.core.exceptions import InvalidCacheKeyError
from luma.services.cache import TTL_COMMENTS, TTL_PROFILES, CacheService
from luma.services.cached import CachedCommentService, CachedProfileService


@pytest.fixture
def profiles(profile_remote: MagicMock, cache: CacheService) -> CachedProfileService:
    return CachedProfileService(profile_remote, cache)


@pytest.fixture
def comments(comment_remote: MagicMock, cache: CacheService) -> CachedCommentService:
    return CachedCommentService(comment_remote, cache)


# =============================================================================
# Profiles
# =============================================================================

class TestProfiles:
    async def test_profile_cached_for_ten_minutes(
        self, profiles: CachedProfileService, profile_remote: MagicMock, clock
    ):
        await profiles.get_profile("pr1")
        clock.advance(TTL_PROFILES - 1)
        await profiles.get_profile("pr1")
        assert profile_remote.get_profile.await_count == 1

        clock.advance(2)
        await profiles.get_profile("pr1")
        assert profile_remote.get_profile.await_count == 2

    async def test_create_invalidates_lists(
        self, profiles: CachedProfileService, profile_remote: MagicMock
    ):
        await profiles.get_profiles()
        await profiles.get_user_profiles("u1")

        await profiles.create_profile({"name": "Alex"})
        await profiles.get_profiles()
        await profiles.get_user_profiles("u1")

        assert profile_remote.get_profiles.await_count == 2
        assert profile_remote.get_user_profiles.await_count == 2

    async def test_delete_invalidates_profile_list_and_comments(
        self, profiles: CachedProfileService, cache: CacheService
    ):
        await profiles.get_profile("pr1")
        await profiles.get_profile("pr2")
        await profiles.get_profiles()
        await cache.set(cache.keys.profile_comments("pr1"), [{"id": "c1"}])
        await cache.set(cache.keys.post_comments("p1"), [{"id": "c2"}])

        await profiles.delete_profile("pr1")

        assert await cache.get(cache.keys.profile("pr1")) is None
        assert await cache.get(cache.keys.profiles()) is None
        assert await cache.get(cache.keys.profile_comments("pr1")) is None
        assert await cache.get(cache.keys.profile("pr2")) is not None
        assert await cache.get(cache.keys.post_comments("p1")) == [{"id": "c2"}]

    async def test_update_invalidates_profile(
        self, profiles: CachedProfileService, profile_remote: MagicMock
    ):
        await profiles.get_profile("pr1")
        await profiles.update_profile("pr1", {"name": "Sam B."})
        await profiles.get_profile("pr1")
        assert profile_remote.get_profile.await_count == 2

    async def test_failed_delete_keeps_cache(
        self, profiles: CachedProfileService, profile_remote: MagicMock
    ):
        await profiles.get_profile("pr1")
        profile_remote.delete_profile.side_effect = PermissionError("not owner")

        with pytest.raises(PermissionError):
            await profiles.delete_profile("pr1")
        await profiles.get_profile("pr1")

        profile_remote.get_profile.assert_awaited_once()


# =============================================================================
# Comments
# =============================================================================

class TestComments:
    async def test_comments_expire_after_one_minute(
        self, comments: CachedCommentService, comment_remote: MagicMock, clock
    ):
        await comments.get_post_comments("p1")
        clock.advance(TTL_COMMENTS + 1)
        await comments.get_post_comments("p1")
        assert comment_remote.get_post_comments.await_count == 2

    async def test_user_comments_use_user_ttl(
        self, comments: CachedCommentService, comment_remote: MagicMock, clock
    ):
        await comments.get_user_comments("u1")
        clock.advance(TTL_COMMENTS * 2)
        await comments.get_user_comments("u1")
        comment_remote.get_user_comments.assert_awaited_once()

    async def test_create_on_post_scoped(
        self, comments: CachedCommentService, comment_remote: MagicMock
    ):
        await comments.get_post_comments("p1")
        await comments.get_post_comments("p2")
        await comments.get_profile_comments("pr1")
        await comments.get_user_comments("u1")

        await comments.create_comment({"post_id": "p1", "user_id": "u1", "text": "+1"})

        await comments.get_post_comments("p1")
        await comments.get_post_comments("p2")
        await comments.get_profile_comments("pr1")
        await comments.get_user_comments("u1")

        assert comment_remote.get_post_comments.await_count == 3
        assert comment_remote.get_profile_comments.await_count == 1
        assert comment_remote.get_user_comments.await_count == 2

    async def test_create_on_profile_scoped(
        self, comments: CachedCommentService, comment_remote: MagicMock
    ):
        await comments.get_post_comments("p1")
        await comments.get_profile_comments("pr1")

        await comments.create_comment({"profile_id": "pr1", "text": "careful"})

        await comments.get_post_comments("p1")
        await comments.get_profile_comments("pr1")

        assert comment_remote.get_post_comments.await_count == 1
        assert comment_remote.get_profile_comments.await_count == 2

    @pytest.mark.parametrize("action,args", [
        ("update_comment", ("c1", {"text": "edited"})),
        ("delete_comment", ("c1",)),
    ])
    async def test_edit_and_delete_drop_all_comments(
        self, comments: CachedCommentService, comment_remote: MagicMock, action: str, args: tuple
    ):
        await comments.get_post_comments("p1")
        await comments.get_profile_comments("pr1")

        await getattr(comments, action)(*args)

        await comments.get_post_comments("p1")
        await comments.get_profile_comments("pr1")

        assert comment_remote.get_post_comments.await_count == 2
        assert comment_remote.get_profile_comments.await_count == 2


class TestRejectedIds:
    @pytest.mark.parametrize("action,args", [
        ("update_profile", ("", {"name": "Sam"})),
        ("delete_profile", (None,)),
    ])
    async def test_bad_profile_id_rejected_before_remote(
        self, profiles: CachedProfileService, profile_remote: MagicMock, action: str, args: tuple
    ):
        with pytest.raises(InvalidCacheKeyError):
            await getattr(profiles, action)(*args)

        getattr(profile_remote, action).assert_not_awaited()

    async def test_comment_without_author_still_invalidates_target(
        self, comments: CachedCommentService, comment_remote: MagicMock
    ):
        await comments.get_post_comments("p1")

        await comments.create_comment({"post_id": "p1", "user_id": "", "text": "+1"})
        await comments.get_post_comments("p1")

        assert comment_remote.get_post_comments.await_count == 2
