"""
View Tracking Service

Decides whether a product view is counted. A view bumps the stored counter
only if the same client has not had a view counted for the same product
within the cache's suppression window.

The fingerprint is marked only after the store confirms the increment, so a
failed or missing product never suppresses a later retry.
"""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from unitrade.core.view_cache import ViewDedupCache, make_fingerprint

logger = logging.getLogger(__name__)


class ViewCounterStore(Protocol):
    """The two counter operations view tracking needs from the product store."""

    async def get_views(self, product_id: UUID) -> int | None: ...

    async def increment_views(self, product_id: UUID) -> int | None: ...


class ProductNotFoundError(LookupError):
    """Raised when the store has no product with the requested ID."""

    def __init__(self, product_id: UUID):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


@dataclass(frozen=True)
class ViewResult:
    """Outcome of a single record_view call."""

    counted: bool
    views: int


class ViewTrackingService:
    """Applies view deduplication in front of the product view counter."""

    def __init__(self, cache: ViewDedupCache, store: ViewCounterStore):
        self.cache = cache
        self.store = store

    async def record_view(self, product_id: UUID, client_id: str) -> ViewResult:
        """
        Record that `client_id` viewed `product_id`.

        Args:
            product_id: Product UUID
            client_id: Client identifier (usually the client IP)

        Returns:
            ViewResult with whether the view was counted and the resulting count

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        key = make_fingerprint(client_id, str(product_id))

        if self.cache.has_recently_viewed(key):
            views = await self.store.get_views(product_id)
            logger.debug(f"View suppressed for product {product_id} from {client_id}")
            return ViewResult(counted=False, views=views or 0)

        # Store errors propagate; the fingerprint stays unmarked
        views = await self.store.increment_views(product_id)
        if views is None:
            raise ProductNotFoundError(product_id)

        self.cache.mark_viewed(key)

        logger.info(
            f"View counted for product {product_id}",
            extra={"product_id": str(product_id), "client_id": client_id, "views": views},
        )
        return ViewResult(counted=True, views=views)
