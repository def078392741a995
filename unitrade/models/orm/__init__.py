"""SQLAlchemy ORM models for UniTrade."""

from unitrade.models.orm.base import Base
from unitrade.models.orm.product import Product
from unitrade.models.orm.review import Review

__all__ = [
    "Base",
    "Product",
    "Review",
]
