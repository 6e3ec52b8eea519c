"""Cache TTL and resource tag constants."""

from enum import Enum

# Cache TTL constants (in milliseconds)
TTL_DEFAULT = 5 * 60 * 1000  # 5 minutes - fallback
TTL_POSTS = 2 * 60 * 1000  # 2 minutes - post lists and single posts
TTL_PROFILES = 10 * 60 * 1000  # 10 minutes - profiles rarely change
TTL_USER_DATA = 5 * 60 * 1000  # 5 minutes - per-user aggregates
TTL_COMMENTS = 1 * 60 * 1000  # 1 minute - highly dynamic
TTL_MESSAGES = 30 * 1000  # 30 seconds - highly dynamic
TTL_NOTIFICATIONS = 1 * 60 * 1000  # 1 minute

KEY_SEPARATOR = ":"

# Parameter defaults used by list keys
DEFAULT_CATEGORY = "all"
DEFAULT_SORT = "recent"
DEFAULT_LIMIT = 50


class ResourceClass(str, Enum):
    """Resource tags; no tag is a prefix of another tag followed by the separator."""

    POSTS = "posts"  # posts:{category}:{sort}:{limit}
    POST = "post"  # post:{post_id}
    USER_POSTS = "userPosts"  # userPosts:{user_id}
    LIKED_POSTS = "likedPosts"  # likedPosts:{user_id}
    PROFILES = "profiles"  # profiles:all
    PROFILE = "profile"  # profile:{profile_id}
    USER_PROFILES = "userProfiles"  # userProfiles:{user_id}
    COMMENTS = "comments"  # comments:{post|profile|user}:{id}
    CONVERSATIONS = "conversations"  # conversations:{user_id}
    MESSAGES = "messages"  # messages:{user_id}:{user_id}, ids sorted
    NOTIFICATIONS = "notifications"  # notifications:{user_id}:{limit}
    USER_PROFILE = "userProfile"  # userProfile:{user_id}
    USER_SETTINGS = "userSettings"  # userSettings:{user_id}


# Comment key scopes (first parameter of a comments key)
COMMENT_SCOPE_POST = "post"
COMMENT_SCOPE_PROFILE = "profile"
COMMENT_SCOPE_USER = "user"
