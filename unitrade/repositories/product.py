"""
Product Repository

Database operations for the Product model, including the atomic view
counter used by view tracking.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy import distinct, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from unitrade.models.orm.product import Product
from unitrade.repositories.base import BaseRepository


@dataclass
class ProductFilters:
    """Optional catalogue filters. None means "don't filter"."""

    seller_id: UUID | None = None
    category: str | None = None
    location: str | None = None
    condition: str | None = None
    sold: bool | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None


class ProductRepository(BaseRepository[Product]):
    """Repository for Product model operations."""

    model = Product

    # Columns matched by the free-text `q` search
    SEARCH_COLUMNS = ["title", "description", "category", "location"]

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def search(
        self,
        filters: ProductFilters,
        *,
        q: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        List products newest first.

        Args:
            filters: Structured filters
            q: Free-text term matched against SEARCH_COLUMNS
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        conditions: list[ColumnElement[bool]] = []

        if filters.seller_id is not None:
            conditions.append(Product.seller_id == filters.seller_id)
        if filters.category:
            conditions.append(Product.category == filters.category)
        if filters.location:
            conditions.append(Product.location.icontains(filters.location, autoescape=True))
        if filters.condition:
            conditions.append(Product.condition == filters.condition)
        if filters.sold is not None:
            conditions.append(Product.sold == filters.sold)
        if filters.min_price is not None:
            conditions.append(Product.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Product.price <= filters.max_price)

        return await self.get_paginated(
            filters=conditions,
            search_columns=self.SEARCH_COLUMNS,
            search_term=q.strip() if q else None,
            sort_by="created_at",
            sort_dir="desc",
            limit=limit,
            offset=offset,
        )

    async def count_summary(self) -> tuple[int, int, int]:
        """
        Count all, unsold and sold products.

        Returns:
            Tuple of (total, available, sold)
        """
        total = await self.count()
        available = await self.count(Product.sold.is_(False))
        sold = await self.count(Product.sold.is_(True))
        return total, available, sold

    async def get_locations(self) -> list[str]:
        """Distinct non-empty locations of unsold products, trimmed and sorted."""
        result = await self.session.execute(
            select(distinct(Product.location)).where(
                Product.sold.is_(False),
                Product.location.is_not(None),
                func.trim(Product.location) != "",
            )
        )
        locations = {value.strip() for value in result.scalars().all() if value and value.strip()}
        return sorted(locations, key=str.casefold)

    async def get_views(self, product_id: UUID) -> int | None:
        """
        Read the current view counter.

        Returns:
            View count, or None if the product does not exist
        """
        result = await self.session.execute(
            select(Product.views).where(Product.id == product_id)
        )
        return result.scalar_one_or_none()

    async def increment_views(self, product_id: UUID) -> int | None:
        """
        Atomically add one to the view counter and commit.

        The increment runs as a single UPDATE ... RETURNING so concurrent
        requests never lose a count. It is committed before returning so a
        caller acting on the result knows the write is durable.

        Returns:
            New view count, or None if the product does not exist
        """
        result = await self.session.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(views=Product.views + 1)
            .returning(Product.views)
        )
        views = result.scalar_one_or_none()
        if views is not None:
            await self.session.commit()
        return views
