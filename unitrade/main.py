"""
UniTrade API - FastAPI Application

Main entry point for the FastAPI application. Owns the process-wide view
cache and the background task that sweeps it.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import OperationalError

from unitrade import __version__
from unitrade.config import Settings, get_settings
from unitrade.core.database import close_db, init_db
from unitrade.core.view_cache import ViewCacheSweeper, ViewDedupCache
from unitrade.models.contracts.common import ErrorResponse
from unitrade.routers import health_router, products_router, reviews_router

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Connects the database and starts the view cache sweeper on startup;
    stops both on shutdown.
    """
    settings = get_settings()
    logger.info("Starting UniTrade API...")

    logger.info("Initializing database connection...")
    await init_db()
    logger.info("Database connection established")

    sweeper: ViewCacheSweeper = app.state.view_cache_sweeper
    sweeper.start()

    logger.info(f"UniTrade API started in {settings.environment} mode")

    yield

    logger.info("Shutting down UniTrade API...")
    await sweeper.stop()
    await close_db()
    logger.info("UniTrade API shutdown complete")


def create_app(
    settings: Settings | None = None,
    view_cache: ViewDedupCache | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings override (defaults to environment settings)
        view_cache: View cache to use instead of building one from settings

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="UniTrade API",
        description="University marketplace API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ==========================================================================
    # View Tracking State
    # ==========================================================================
    if view_cache is None:
        view_cache = ViewDedupCache(
            suppression_window=settings.view_suppression_window,
            retention_window=settings.view_retention_window,
        )
    app.state.view_cache = view_cache
    app.state.view_cache_sweeper = ViewCacheSweeper(
        view_cache, interval=settings.view_sweep_interval
    )

    # ==========================================================================
    # CORS Middleware
    # ==========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==========================================================================
    # Global Exception Handlers
    # ==========================================================================

    @app.exception_handler(RequestValidationError)
    @app.exception_handler(PydanticValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError | PydanticValidationError
    ) -> JSONResponse:
        """Request parameter and pydantic model validation errors -> 422."""
        field_errors = {
            ".".join(str(loc) for loc in e["loc"]): e["msg"] for e in exc.errors()
        }
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="validation_error",
                message="Validation failed",
                details={"fields": field_errors},
            ).model_dump(),
        )

    @app.exception_handler(OperationalError)
    async def operational_error_handler(request: Request, exc: OperationalError) -> JSONResponse:
        """Database connection issues -> 503."""
        logger.error(f"Database operational error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(
                error="service_unavailable",
                message="Service temporarily unavailable",
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions -> 500."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_error",
                message="An unexpected error occurred",
            ).model_dump(),
        )

    # ==========================================================================
    # Register Routers
    # ==========================================================================
    app.include_router(health_router)
    app.include_router(products_router, prefix="/api/products")
    # Singular alias kept for older clients
    app.include_router(products_router, prefix="/api/product", include_in_schema=False)
    app.include_router(reviews_router)

    @app.get("/")
    async def root():
        return {
            "name": "UniTrade API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "unitrade.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
