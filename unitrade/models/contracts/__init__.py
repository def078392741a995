"""Pydantic contract models for API requests and responses."""

from unitrade.models.contracts.common import ErrorResponse, HealthResponse
from unitrade.models.contracts.product import (
    ProductCountResponse,
    ProductListResponse,
    ProductLocationsResponse,
    ProductPublic,
    ViewRecordResponse,
)
from unitrade.models.contracts.review import (
    ReviewListResponse,
    ReviewProductSummary,
    ReviewPublic,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Products
    "ProductPublic",
    "ProductListResponse",
    "ProductCountResponse",
    "ProductLocationsResponse",
    "ViewRecordResponse",
    # Reviews
    "ReviewPublic",
    "ReviewProductSummary",
    "ReviewListResponse",
]
