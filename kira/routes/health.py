"""
Health check route for Kira backend.

This endpoint is PUBLIC and provides a simple status check for load
balancers, monitoring, and deployment verification. It does not touch the
document store or the model.
"""

from fastapi import APIRouter

from kira.schemas.health import HealthResponse
from kira.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    tags=["system"],
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "service": "kira-backend"
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse()
