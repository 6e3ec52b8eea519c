"""Remote data service contracts.

The cached services only depend on these call signatures; the transport
(document database, REST, ...) is invisible to the caching layer.
"""

from typing import Any, Protocol


class PostDataService(Protocol):
    async def get_posts(self, category: str | None, sort_by: str, limit: int) -> list[dict[str, Any]]: ...

    async def get_post(self, post_id: str) -> dict[str, Any] | None: ...

    async def get_user_posts(self, user_id: str) -> list[dict[str, Any]]: ...

    async def get_liked_posts(self, user_id: str) -> list[dict[str, Any]]: ...

    async def create_post(self, post_data: dict[str, Any], user_id: str) -> Any: ...

    async def update_post(self, post_id: str, update_data: dict[str, Any]) -> Any: ...

    async def delete_post(self, post_id: str) -> Any: ...

    async def like_post(self, post_id: str, user_id: str) -> Any: ...

    async def unlike_post(self, post_id: str, user_id: str) -> Any: ...

    async def search_posts(self, query: str) -> list[dict[str, Any]]: ...


class ProfileDataService(Protocol):
    async def get_profiles(self) -> list[dict[str, Any]]: ...

    async def get_profile(self, profile_id: str) -> dict[str, Any] | None: ...

    async def get_user_profiles(self, user_id: str) -> list[dict[str, Any]]: ...

    async def create_profile(self, profile_data: dict[str, Any]) -> Any: ...

    async def update_profile(self, profile_id: str, update_data: dict[str, Any]) -> Any: ...

    async def delete_profile(self, profile_id: str) -> Any: ...


class CommentDataService(Protocol):
    async def get_post_comments(self, post_id: str) -> list[dict[str, Any]]: ...

    async def get_profile_comments(self, profile_id: str) -> list[dict[str, Any]]: ...

    async def get_user_comments(self, user_id: str) -> list[dict[str, Any]]: ...

    async def create_comment(self, comment_data: dict[str, Any]) -> Any: ...

    async def update_comment(self, comment_id: str, update_data: dict[str, Any]) -> Any: ...

    async def delete_comment(self, comment_id: str) -> Any: ...


class NotificationDataService(Protocol):
    async def get_user_notifications(self, user_id: str, limit: int) -> list[dict[str, Any]]: ...

    async def mark_notification_as_read(self, notification_id: str) -> Any: ...

    async def mark_all_notifications_as_read(self, user_id: str) -> Any: ...

    async def create_notification(self, notification_data: dict[str, Any]) -> Any: ...


class MessageDataService(Protocol):
    async def get_user_conversations(self, user_id: str) -> list[dict[str, Any]]: ...

    async def get_messages(self, user_a: str, user_b: str) -> list[dict[str, Any]]: ...

    async def create_message(self, message_data: dict[str, Any]) -> Any: ...


class UserDataService(Protocol):
    async def get_user_profile(self, user_id: str) -> dict[str, Any] | None: ...

    async def update_user_profile(self, user_id: str, update_data: dict[str, Any]) -> Any: ...

    async def get_user_settings(self, user_id: str) -> dict[str, Any] | None: ...

    async def update_user_settings(self, user_id: str, update_data: dict[str, Any]) -> Any: ...
