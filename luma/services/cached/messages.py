"""Cached messaging service."""

import asyncio
from typing import Any

from luma.services.cache import CacheService, ResourceClass, get_cache_service
from luma.services.remote import MessageDataService


class CachedMessageService:
    """Conversation lists and message threads with a short TTL."""

    def __init__(self, remote: MessageDataService, cache: CacheService | None = None) -> None:
        self._remote = remote
        self._cache = cache if cache is not None else get_cache_service()

    async def get_conversations(self, user_id: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_conversations(
            user_id, lambda: self._remote.get_user_conversations(user_id), force_refresh
        )

    async def get_messages(self, user_a: str, user_b: str, force_refresh: bool = False) -> Any:
        return await self._cache.get_messages(
            user_a, user_b, lambda: self._remote.get_messages(user_a, user_b), force_refresh
        )

    async def send_message(self, message_data: dict[str, Any]) -> Any:
        """Send a message; ``message_data["participants"]`` names both users."""
        participants = [str(p) for p in message_data.get("participants") or [] if p]
        result = await self._remote.create_message(message_data)
        if participants:
            await self._cache.invalidate_thread(participants)
        else:
            await asyncio.gather(
                self._cache.invalidate(self._cache.keys.pattern(ResourceClass.MESSAGES)),
                self._cache.invalidate(self._cache.keys.pattern(ResourceClass.CONVERSATIONS)),
            )
        return result
