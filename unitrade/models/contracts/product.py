"""
Product contracts (API request/response schemas).
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductPublic(BaseModel):
    """Product public response model."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    seller_id: str | None = None
    title: str
    description: str
    price: Decimal
    category: str
    condition: str
    location: str
    images: list[str] = Field(default_factory=list)
    views: int = 0
    sold: bool = False
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """Paginated response for product list."""

    items: list[ProductPublic]
    total: int
    limit: int
    offset: int


class ProductCountResponse(BaseModel):
    """Catalogue totals."""

    count: int
    available: int
    sold: int


class ProductLocationsResponse(BaseModel):
    """Distinct pickup locations of unsold products."""

    locations: list[str]


class ViewRecordResponse(BaseModel):
    """Result of recording a product view."""

    message: str
    counted: bool = Field(..., description="Whether this call incremented the counter")
    views: int = Field(..., description="View count after this call")
