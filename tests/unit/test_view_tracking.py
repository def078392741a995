"""
Unit tests for ViewTrackingService.

Uses the in-memory product store and a fake clock, so every decision the
service makes about counting is deterministic.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

from unitrade.core.view_cache import ViewDedupCache, make_fingerprint
from unitrade.services.view_tracking import (
    ProductNotFoundError,
    ViewResult,
    ViewTrackingService,
)


@pytest.fixture
def cache(fake_clock):
    return ViewDedupCache(clock=fake_clock)


@pytest.fixture
def service(cache, product_store):
    return ViewTrackingService(cache, product_store)


@pytest.mark.unit
class TestViewTrackingService:
    """Tests for ViewTrackingService.record_view."""

    async def test_first_view_is_counted(self, service, product_store, cache):
        product = product_store.add()

        result = await service.record_view(product.id, "1.2.3.4")

        assert result == ViewResult(counted=True, views=1)
        assert cache.has_recently_viewed(make_fingerprint("1.2.3.4", str(product.id)))

    async def test_repeat_view_inside_window_is_not_counted(self, service, product_store):
        product = product_store.add(views=7)

        await service.record_view(product.id, "1.2.3.4")
        result = await service.record_view(product.id, "1.2.3.4")

        assert result == ViewResult(counted=False, views=8)
        assert product_store.increment_calls == 1

    async def test_view_counted_again_after_window(self, service, product_store, fake_clock):
        product = product_store.add()

        await service.record_view(product.id, "1.2.3.4")
        fake_clock.advance(minutes=5)
        suppressed = await service.record_view(product.id, "1.2.3.4")
        fake_clock.advance(minutes=26)
        recounted = await service.record_view(product.id, "1.2.3.4")

        assert suppressed == ViewResult(counted=False, views=1)
        assert recounted == ViewResult(counted=True, views=2)

    async def test_different_clients_counted_independently(self, service, product_store):
        product = product_store.add()

        first = await service.record_view(product.id, "1.2.3.4")
        second = await service.record_view(product.id, "5.6.7.8")

        assert first.counted is True
        assert second == ViewResult(counted=True, views=2)

    async def test_missing_product_raises_and_leaves_cache_untouched(self, service, cache):
        product_id = uuid4()

        with pytest.raises(ProductNotFoundError) as exc_info:
            await service.record_view(product_id, "1.2.3.4")

        assert exc_info.value.product_id == product_id
        assert len(cache) == 0
        assert not cache.has_recently_viewed(make_fingerprint("1.2.3.4", str(product_id)))

    async def test_store_failure_propagates_and_allows_retry(self, service, product_store, cache):
        product = product_store.add()
        product_store.fail_increment = True

        with pytest.raises(SQLAlchemyError):
            await service.record_view(product.id, "1.2.3.4")

        assert len(cache) == 0

        product_store.fail_increment = False
        result = await service.record_view(product.id, "1.2.3.4")

        assert result == ViewResult(counted=True, views=1)

    async def test_suppressed_view_of_deleted_product_reports_zero(
        self, service, product_store
    ):
        product = product_store.add(views=3)
        await service.record_view(product.id, "1.2.3.4")
        del product_store.products[product.id]

        result = await service.record_view(product.id, "1.2.3.4")

        assert result == ViewResult(counted=False, views=0)
