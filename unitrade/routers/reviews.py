"""
Reviews Router

Public read endpoints for reviews received by a user or left on a product.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from unitrade.core.database import DbSession
from unitrade.models.contracts.review import (
    ReviewListResponse,
    ReviewProductSummary,
    ReviewPublic,
)
from unitrade.models.orm.review import Review
from unitrade.repositories.review import ReviewRepository

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def get_review_repository(db: DbSession) -> ReviewRepository:
    """Dependency providing a ReviewRepository bound to the request session."""
    return ReviewRepository(db)


Reviews = Annotated[ReviewRepository, Depends(get_review_repository)]


def _parse_id(raw: str, label: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID",
        ) from None


def _to_public(review: Review) -> ReviewPublic:
    """Convert Review ORM model to public response."""
    product = review.product
    return ReviewPublic(
        id=str(review.id),
        trade_id=str(review.trade_id),
        product_id=str(review.product_id) if review.product_id else None,
        reviewer_id=str(review.reviewer_id),
        recipient_id=str(review.recipient_id),
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        product=ReviewProductSummary(
            id=str(product.id),
            title=product.title,
            images=list(product.images or []),
        )
        if product
        else None,
    )


def _to_list_response(reviews: list[Review]) -> ReviewListResponse:
    count = len(reviews)
    average = sum(r.rating for r in reviews) / count if count else 0.0
    return ReviewListResponse(
        reviews=[_to_public(r) for r in reviews],
        average_rating=round(average, 2),
        review_count=count,
    )


@router.get("/user/{user_id}", response_model=ReviewListResponse)
async def list_user_reviews(user_id: str, reviews: Reviews) -> ReviewListResponse:
    """
    Reviews received by a user, with their average rating.

    Raises:
        HTTPException: 400 for a malformed user ID
    """
    return _to_list_response(await reviews.list_for_recipient(_parse_id(user_id, "user")))


@router.get("/product/{product_id}", response_model=ReviewListResponse)
async def list_product_reviews(product_id: str, reviews: Reviews) -> ReviewListResponse:
    """
    Reviews left on a product, with their average rating.

    Raises:
        HTTPException: 400 for a malformed product ID
    """
    return _to_list_response(await reviews.list_for_product(_parse_id(product_id, "product")))
