"""Domain services that put the cache in front of remote data reads.

Reads go through the cache; writes hit the remote service first and then
invalidate every cached key the write could have changed. A failed write
leaves the cache untouched.
"""

from luma.services.cached.comments import CachedCommentService
from luma.services.cached.messages import CachedMessageService
from luma.services.cached.notifications import CachedNotificationService
from luma.services.cached.posts import CachedPostService
from luma.services.cached.profiles import CachedProfileService
from luma.services.cached.users import CachedUserService

__all__ = [
    "CachedCommentService",
    "CachedMessageService",
    "CachedNotificationService",
    "CachedPostService",
    "CachedProfileService",
    "CachedUserService",
]
