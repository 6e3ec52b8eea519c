"""API dependencies."""

from typing import Annotated

from fastapi import Depends, Header

from luma.core.config import get_settings
from luma.core.exceptions import AuthenticationError
from luma.services.cache import CacheService, get_cache_service


async def require_admin(
    x_admin_token: Annotated[str | None, Header()] = None,
) -> None:
    """Guard operator endpoints when an admin token is configured."""
    expected = get_settings().admin_token
    if expected and x_admin_token != expected:
        raise AuthenticationError("Invalid or missing admin token")


Cache = Annotated[CacheService, Depends(get_cache_service)]
AdminOnly = Depends(require_admin)
