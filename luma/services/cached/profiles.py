"""Cached profile service."""

from typing import Any

from luma.services.cache import CacheService, get_cache_service
from luma.services.remote import ProfileDataService


class CachedProfileService:
    """Profile reads through the cache, profile writes with invalidation."""

    def __init__(self, remote: ProfileDataService, cache: CacheService | None = None) -> None:
        self._remote = remote
        self._cache = cache if cache is not None else get_cache_service()

    async def get_profiles(self, force_refresh: bool = False) -> Any:
        return await self._cache.get_profiles(self._remote.get_profiles, force_refresh)

    async def get_profile(self, profile_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_profile(
            profile_id, lambda: self._remote.get_profile(profile_id), force_refresh
        )

    async def get_user_profiles(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_user_profiles(
            user_id, lambda: self._remote.get_user_profiles(user_id), force_refresh
        )

    async def create_profile(self, profile_data: dict[str, Any]) -> Any:
        result = await self._remote.create_profile(profile_data)
        await self._cache.invalidate_profile_lists()
        return result

    async def update_profile(self, profile_id: str, update_data: dict[str, Any]) -> Any:
        self._cache.keys.profile(profile_id)  # reject a bad id before the write
        result = await self._remote.update_profile(profile_id, update_data)
        await self._cache.invalidate_profile(profile_id)
        return result

    async def delete_profile(self, profile_id: str) -> Any:
        self._cache.keys.profile(profile_id)  # reject a bad id before the write
        result = await self._remote.delete_profile(profile_id)
        await self._cache.invalidate_profile(profile_id)
        return result
