"""Data access repositories."""

from unitrade.repositories.product import ProductFilters, ProductRepository
from unitrade.repositories.review import ReviewRepository

__all__ = [
    "ProductFilters",
    "ProductRepository",
    "ReviewRepository",
]
