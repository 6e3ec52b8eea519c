"""Cache key registry.

Every cached resource is addressed by a structured ``CacheKey``: a resource
tag plus a tuple of discriminating parameters, rendered as
``{namespace}:{tag}:{param}:{param}...``. Parameters are percent-encoded so a
value containing the separator can never produce another key's rendering.

Bulk invalidation uses ``KeyPattern`` which matches on the tag and a prefix of
the parameter tuple instead of raw substrings.
"""

from dataclasses import dataclass, field
from urllib.parse import quote, unquote

from luma.core.exceptions import InvalidCacheKeyError
from luma.services.cache.constants import (
    COMMENT_SCOPE_POST,
    COMMENT_SCOPE_PROFILE,
    COMMENT_SCOPE_USER,
    DEFAULT_CATEGORY,
    DEFAULT_LIMIT,
    DEFAULT_SORT,
    KEY_SEPARATOR,
    TTL_COMMENTS,
    TTL_DEFAULT,
    TTL_MESSAGES,
    TTL_NOTIFICATIONS,
    TTL_POSTS,
    TTL_PROFILES,
    TTL_USER_DATA,
    ResourceClass,
)

DEFAULT_NAMESPACE = "cache"


def _encode(part: str) -> str:
    return quote(part, safe="")


@dataclass(frozen=True)
class CacheKey:
    """A structured cache key.

    ``ttl`` is the TTL registered for the resource class; it does not take part
    in equality or hashing.
    """

    resource: ResourceClass
    params: tuple[str, ...] = ()
    ttl: int = field(default=TTL_DEFAULT, compare=False)
    namespace: str = DEFAULT_NAMESPACE

    def __str__(self) -> str:
        parts = [self.namespace, self.resource.value, *(_encode(p) for p in self.params)]
        return KEY_SEPARATOR.join(parts)

    @classmethod
    def parse(cls, raw: str, namespace: str = DEFAULT_NAMESPACE) -> "CacheKey | None":
        """Rebuild a key from its rendering; ``None`` for foreign or unknown keys.

        The registered TTL is not recoverable from the rendering, so parsed keys
        carry the default TTL.
        """
        prefix = namespace + KEY_SEPARATOR
        if not raw.startswith(prefix):
            return None
        tag, *params = raw[len(prefix):].split(KEY_SEPARATOR)
        try:
            resource = ResourceClass(tag)
        except ValueError:
            return None
        return cls(resource, tuple(unquote(p) for p in params), namespace=namespace)


@dataclass(frozen=True)
class KeyPattern:
    """Matches every key of one resource class whose params start with ``params_prefix``."""

    resource: ResourceClass
    params_prefix: tuple[str, ...] = ()
    namespace: str = DEFAULT_NAMESPACE

    def matches(self, key: CacheKey) -> bool:
        return (
            key.namespace == self.namespace
            and key.resource == self.resource
            and key.params[: len(self.params_prefix)] == self.params_prefix
        )

    def __str__(self) -> str:
        parts = [self.namespace, self.resource.value, *(_encode(p) for p in self.params_prefix)]
        return KEY_SEPARATOR.join(parts) + KEY_SEPARATOR


class CacheKeys:
    """Deterministic key builders, one per resource class."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        if not namespace or KEY_SEPARATOR in namespace:
            raise InvalidCacheKeyError("namespace", "namespace must be non-empty without separators")
        self.namespace = namespace

    def _key(self, resource: ResourceClass, ttl: int, *params: object) -> CacheKey:
        rendered: list[str] = []
        for param in params:
            if param is None or str(param) == "":
                raise InvalidCacheKeyError(resource.value, "empty discriminator")
            rendered.append(str(param))
        return CacheKey(resource, tuple(rendered), ttl=ttl, namespace=self.namespace)

    def pattern(self, resource: ResourceClass, *params_prefix: object) -> KeyPattern:
        """Pattern covering a whole resource class, or a parameter-prefixed slice of it."""
        return KeyPattern(
            resource,
            tuple(str(p) for p in params_prefix),
            namespace=self.namespace,
        )

    # ========== Posts ==========

    def posts(
        self,
        category: str | None = None,
        sort_by: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> CacheKey:
        return self._key(
            ResourceClass.POSTS,
            TTL_POSTS,
            category or DEFAULT_CATEGORY,
            sort_by or DEFAULT_SORT,
            limit,
        )

    def post(self, post_id: str) -> CacheKey:
        return self._key(ResourceClass.POST, TTL_POSTS, post_id)

    def user_posts(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.USER_POSTS, TTL_USER_DATA, user_id)

    def liked_posts(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.LIKED_POSTS, TTL_USER_DATA, user_id)

    # ========== Profiles ==========

    def profiles(self) -> CacheKey:
        return self._key(ResourceClass.PROFILES, TTL_PROFILES, "all")

    def profile(self, profile_id: str) -> CacheKey:
        return self._key(ResourceClass.PROFILE, TTL_PROFILES, profile_id)

    def user_profiles(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.USER_PROFILES, TTL_USER_DATA, user_id)

    # ========== Comments ==========

    def post_comments(self, post_id: str) -> CacheKey:
        return self._key(ResourceClass.COMMENTS, TTL_COMMENTS, COMMENT_SCOPE_POST, post_id)

    def profile_comments(self, profile_id: str) -> CacheKey:
        return self._key(ResourceClass.COMMENTS, TTL_COMMENTS, COMMENT_SCOPE_PROFILE, profile_id)

    def user_comments(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.COMMENTS, TTL_USER_DATA, COMMENT_SCOPE_USER, user_id)

    # ========== Messaging ==========

    def conversations(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.CONVERSATIONS, TTL_MESSAGES, user_id)

    def messages(self, user_a: str, user_b: str) -> CacheKey:
        """Thread between two users; both directions share one key."""
        first, second = sorted((user_a, user_b), key=str)
        return self._key(ResourceClass.MESSAGES, TTL_MESSAGES, first, second)

    # ========== Notifications ==========

    def notifications(self, user_id: str, limit: int = DEFAULT_LIMIT) -> CacheKey:
        return self._key(ResourceClass.NOTIFICATIONS, TTL_NOTIFICATIONS, user_id, limit)

    # ========== User account ==========

    def user_profile(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.USER_PROFILE, TTL_USER_DATA, user_id)

    def user_settings(self, user_id: str) -> CacheKey:
        return self._key(ResourceClass.USER_SETTINGS, TTL_USER_DATA, user_id)
