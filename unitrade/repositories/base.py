"""
Base Repository

Common query helpers shared by UniTrade repositories.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from unitrade.models.orm.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Base repository bound to one ORM model and one session."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelT | None:
        """
        Get entity by ID.

        Returns:
            Entity or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def count(self, *filters: ColumnElement[bool]) -> int:
        """Count rows matching all of `filters`."""
        query = select(func.count(self.model.id))  # type: ignore[attr-defined]
        for f in filters:
            query = query.where(f)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def get_paginated(
        self,
        *,
        filters: list[ColumnElement[bool]] | None = None,
        search_columns: list[str] | None = None,
        search_term: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc",
        limit: int = 100,
        offset: int = 0,
        options: list[Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """
        Get paginated results with optional search and sorting.

        Args:
            filters: List of SQLAlchemy filter conditions
            search_columns: Column names matched case-insensitively against search_term
            search_term: Literal substring to search for
            sort_by: Column name to sort by
            sort_dir: Sort direction ("asc" or "desc")
            limit: Maximum number of results
            offset: Number of results to skip
            options: SQLAlchemy loader options

        Returns:
            Tuple of (list of entities, total count)
        """
        query = select(self.model)
        count_query = select(func.count(self.model.id))  # type: ignore[attr-defined]

        if options:
            for opt in options:
                query = query.options(opt)

        if filters:
            for f in filters:
                query = query.where(f)
                count_query = count_query.where(f)

        if search_term and search_columns:
            search_conditions = [
                getattr(self.model, col).icontains(search_term, autoescape=True)
                for col in search_columns
                if hasattr(self.model, col)
            ]
            if search_conditions:
                combined = or_(*search_conditions)
                query = query.where(combined)
                count_query = count_query.where(combined)

        if sort_by and hasattr(self.model, sort_by):
            order_func = desc if sort_dir == "desc" else asc
            query = query.order_by(order_func(getattr(self.model, sort_by)))

        total_result = await self.session.execute(count_query)
        total = total_result.scalar() or 0

        query = query.limit(limit).offset(offset)
        result = await self.session.execute(query)
        items = list(result.scalars().all())

        return items, total
