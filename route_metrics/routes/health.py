"""
Health Check Routes

Liveness endpoints, usually excluded from request metrics.

Author: Development Team
Version: 1.0.0
"""

from fastapi import APIRouter, status
from route_metrics.models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/healthz",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def healthz():
    """Return 200 while the process is serving."""
    return HealthResponse(status="healthy")


@router.get(
    "/health/live",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Check if service is alive (process running)"
)
async def liveness_check():
    """
    Liveness probe for Kubernetes/Docker.

    This endpoint should always succeed if the process is alive.
    """
    return HealthResponse(status="alive")
