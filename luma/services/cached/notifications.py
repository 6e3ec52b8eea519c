"""Cached notification service."""

from typing import Any

from luma.services.cache import CacheService, get_cache_service
from luma.services.cache.constants import DEFAULT_LIMIT
from luma.services.remote import NotificationDataService


class CachedNotificationService:
    def __init__(self, remote: NotificationDataService, cache: CacheService | None = None) -> None:
        self._remote = remote
        self._cache = cache if cache is not None else get_cache_service()

    async def get_user_notifications(
        self,
        user_id: str,
        limit: int = DEFAULT_LIMIT,
        force_refresh: bool = False,
    ) -> Any:
        return await self._cache.get_notifications(
            user_id,
            lambda: self._remote.get_user_notifications(user_id, limit),
            force_refresh,
            limit=limit,
        )

    async def mark_notification_as_read(self, notification_id: str) -> Any:
        # The owner is unknown from the id alone
        result = await self._remote.mark_notification_as_read(notification_id)
        await self._cache.invalidate_notifications()
        return result

    async def mark_all_notifications_as_read(self, user_id: str) -> Any:
        result = await self._remote.mark_all_notifications_as_read(user_id)
        await self._cache.invalidate_notifications(user_id)
        return result

    async def create_notification(self, notification_data: dict[str, Any]) -> Any:
        result = await self._remote.create_notification(notification_data)
        await self._cache.invalidate_notifications(notification_data.get("user_id"))
        return result
