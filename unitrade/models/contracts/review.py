"""
Review contracts (API response schemas).
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ReviewProductSummary(BaseModel):
    """The reviewed product, trimmed to what a review card shows."""

    id: str
    title: str
    images: list[str] = Field(default_factory=list)


class ReviewPublic(BaseModel):
    """Review public response model."""

    id: str
    trade_id: str
    product_id: str | None = None
    reviewer_id: str
    recipient_id: str
    rating: int
    comment: str
    created_at: datetime
    product: ReviewProductSummary | None = None


class ReviewListResponse(BaseModel):
    """Reviews, newest first, with their rating summary."""

    reviews: list[ReviewPublic]
    average_rating: float = Field(..., description="Mean rating rounded to 2 decimals, 0 if none")
    review_count: int
