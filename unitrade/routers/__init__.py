"""API routers."""

from unitrade.routers.health import router as health_router
from unitrade.routers.products import router as products_router
from unitrade.routers.reviews import router as reviews_router

__all__ = [
    "health_router",
    "products_router",
    "reviews_router",
]
