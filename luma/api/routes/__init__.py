"""Routes module exports."""

from luma.api.routes.cache import router as cache_router
from luma.api.routes.health import router as health_router

__all__ = [
    "cache_router",
    "health_router",
]
