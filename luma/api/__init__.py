"""API module exports."""

from luma.api.deps import AdminOnly, Cache
from luma.api.routes import cache_router, health_router

__all__ = [
    # Routers
    "cache_router",
    "health_router",
    # Dependencies
    "AdminOnly",
    "Cache",
]
