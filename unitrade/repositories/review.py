"""
Review Repository

Read queries for reviews, scoped by recipient or by product.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from unitrade.models.orm.review import Review
from unitrade.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review model operations."""

    model = Review

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def list_for_recipient(self, recipient_id: UUID) -> list[Review]:
        """Reviews received by a user, newest first."""
        return await self._list_newest_first(Review.recipient_id == recipient_id)

    async def list_for_product(self, product_id: UUID) -> list[Review]:
        """Reviews left on trades of a product, newest first."""
        return await self._list_newest_first(Review.product_id == product_id)

    async def _list_newest_first(self, condition: ColumnElement[bool]) -> list[Review]:
        result = await self.session.execute(
            select(Review)
            .options(selectinload(Review.product))
            .where(condition)
            .order_by(Review.created_at.desc())
        )
        return list(result.scalars().all())
