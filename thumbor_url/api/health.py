from fastapi import APIRouter, status

from thumbor_url.schemas.thumbor import HealthResponse
from thumbor_url.services.thumbor import thumbor_service
from thumbor_url.version import __version__

# Create a router for health check endpoints
router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="""
    Check the health status of the service.

    ## Response
    - status: Overall service status (ok, degraded)
    - version: API version
    - services: thumbor configuration (server, signing, passthrough file types)
    """
)
async def health_check() -> HealthResponse:
    """Check the health status of the service."""
    thumbor_status = thumbor_service.status()
    overall = "ok" if thumbor_status["status"] == "ok" else "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        services={"thumbor": thumbor_status}
    )
