"""
Review ORM model.

A rating left by one trade participant for the other after a completed
trade. Reviews outlive their product: deleting a product nulls product_id.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unitrade.models.orm.base import Base

if TYPE_CHECKING:
    from unitrade.models.orm.product import Product


class Review(Base):
    """Review database table."""

    __tablename__ = "reviews"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    trade_id: Mapped[UUID] = mapped_column(nullable=False)
    product_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )
    reviewer_id: Mapped[UUID] = mapped_column(nullable=False)
    recipient_id: Mapped[UUID] = mapped_column(nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=text("NOW()"),
    )

    # Relationships
    product: Mapped["Product | None"] = relationship()

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
        UniqueConstraint(
            "trade_id", "reviewer_id", "recipient_id", name="uq_reviews_trade_reviewer_recipient"
        ),
        Index("ix_reviews_recipient_id", "recipient_id"),
        Index("ix_reviews_product_id", "product_id"),
    )
