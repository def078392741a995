"""
Products Router

Read endpoints for the product catalogue and the view tracking endpoint.
"""

import logging
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError

from unitrade.core.client_identity import get_client_identifier
from unitrade.core.database import DbSession
from unitrade.core.view_cache import ViewDedupCache
from unitrade.models.contracts.product import (
    ProductCountResponse,
    ProductListResponse,
    ProductLocationsResponse,
    ProductPublic,
    ViewRecordResponse,
)
from unitrade.models.orm.product import Product
from unitrade.repositories.product import ProductFilters, ProductRepository
from unitrade.services.view_tracking import ProductNotFoundError, ViewTrackingService

logger = logging.getLogger(__name__)

# Mounted under /api/products and /api/product by the app factory
router = APIRouter(tags=["products"])


def get_product_repository(db: DbSession) -> ProductRepository:
    """Dependency providing a ProductRepository bound to the request session."""
    return ProductRepository(db)


def get_view_cache(request: Request) -> ViewDedupCache:
    """Dependency returning the view cache owned by the application."""
    return request.app.state.view_cache


Products = Annotated[ProductRepository, Depends(get_product_repository)]
ViewCache = Annotated[ViewDedupCache, Depends(get_view_cache)]


def _parse_product_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid product ID",
        ) from None


def _to_public(product: Product) -> ProductPublic:
    """Convert Product ORM model to public response."""
    return ProductPublic(
        id=str(product.id),
        seller_id=str(product.seller_id) if product.seller_id else None,
        title=product.title,
        description=product.description,
        price=product.price,
        category=product.category,
        condition=product.condition,
        location=product.location,
        images=list(product.images or []),
        views=product.views,
        sold=product.sold,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    products: Products,
    seller_id: UUID | None = Query(None, description="Only products from this seller"),
    category: str | None = Query(None, description="Exact category"),
    q: str | None = Query(None, description="Search title, description, category and location"),
    min_price: Decimal | None = Query(None, ge=0, description="Minimum price"),
    max_price: Decimal | None = Query(None, ge=0, description="Maximum price"),
    location: str | None = Query(None, description="Location contains (case-insensitive)"),
    condition: str | None = Query(None, description="Exact condition"),
    sold: bool | None = Query(None, description="Filter by sold status"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum results per page"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
) -> ProductListResponse:
    """
    List products, newest first, with optional filters and text search.
    """
    filters = ProductFilters(
        seller_id=seller_id,
        category=category,
        location=location,
        condition=condition,
        sold=sold,
        min_price=min_price,
        max_price=max_price,
    )
    items, total = await products.search(filters, q=q, limit=limit, offset=offset)

    return ProductListResponse(
        items=[_to_public(p) for p in items],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/count", response_model=ProductCountResponse)
async def count_products(products: Products) -> ProductCountResponse:
    """Total, available and sold product counts."""
    total, available, sold = await products.count_summary()
    return ProductCountResponse(count=total, available=available, sold=sold)


@router.get("/locations", response_model=ProductLocationsResponse)
async def list_locations(products: Products) -> ProductLocationsResponse:
    """Distinct pickup locations of products still for sale."""
    return ProductLocationsResponse(locations=await products.get_locations())


@router.get("/{product_id}", response_model=ProductPublic)
async def get_product(product_id: str, products: Products) -> ProductPublic:
    """
    Get a product by ID.

    Raises:
        HTTPException: 400 for a malformed ID, 404 if the product doesn't exist
    """
    product = await products.get_by_id(_parse_product_id(product_id))

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return _to_public(product)


@router.post("/{product_id}/view", response_model=ViewRecordResponse)
async def record_view(
    product_id: str,
    request: Request,
    products: Products,
    cache: ViewCache,
) -> ViewRecordResponse:
    """
    Record a view of a product.

    Repeat views from the same client inside the suppression window are
    acknowledged without touching the counter.

    Raises:
        HTTPException: 400 for a malformed ID, 404 if the product doesn't
            exist, 500 if the counter update fails
    """
    pid = _parse_product_id(product_id)
    client_id = get_client_identifier(
        request.headers, request.client.host if request.client else None
    )

    service = ViewTrackingService(cache, products)
    try:
        result = await service.record_view(pid, client_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        ) from None
    except SQLAlchemyError:
        logger.error(f"View tracking failed for product {pid}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to track view due to a server error",
        ) from None

    return ViewRecordResponse(
        message="View counted successfully" if result.counted else "Already viewed recently",
        counted=result.counted,
        views=result.views,
    )
