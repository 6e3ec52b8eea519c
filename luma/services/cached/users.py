"""Cached user account service."""

from typing import Any

from luma.services.cache import CacheService, get_cache_service
from luma.services.remote import UserDataService


class CachedUserService:
    def __init__(self, remote: UserDataService, cache: CacheService | None = None) -> None:
        self._remote = remote
        self._cache = cache if cache is not None else get_cache_service()

    async def get_user_profile(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_user_profile(
            user_id, lambda: self._remote.get_user_profile(user_id), force_refresh
        )

    async def get_user_settings(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_user_settings(
            user_id, lambda: self._remote.get_user_settings(user_id), force_refresh
        )

    async def update_user_profile(self, user_id: str, update_data: dict[str, Any]) -> Any:
        key = self._cache.keys.user_profile(user_id)
        result = await self._remote.update_user_profile(user_id, update_data)
        await self._cache.remove(key)
        return result

    async def update_user_settings(self, user_id: str, update_data: dict[str, Any]) -> Any:
        key = self._cache.keys.user_settings(user_id)
        result = await self._remote.update_user_settings(user_id, update_data)
        await self._cache.remove(key)
        return result

    async def clear_user_cache(self, user_id: str) -> None:
        """Forget everything cached for a user, typically on logout."""
        await self._cache.invalidate_user(user_id)
