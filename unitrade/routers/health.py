"""
Health Check Router

Liveness endpoint for load balancers and uptime monitors.
"""

from fastapi import APIRouter

from unitrade import __version__
from unitrade.models.contracts.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__)
