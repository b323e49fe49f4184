"""Health check router for API server monitoring.

This module provides health check endpoints for monitoring the API server
status and database connectivity.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import Settings
from ..database import check_database_connection, get_database_info
from ..dependencies import get_app_settings

router = APIRouter(
    prefix="/api/health",
    tags=["health"],
    responses={
        503: {"description": "Service unavailable"},
    },
)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/",
    response_model=dict[str, Any],
    summary="Health check with database connectivity",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, Any]:
    """Health check including database connectivity.

    Raises:
        HTTPException: 503 if the database is unreachable

    Example:
        {
            "status": "healthy",
            "timestamp": "2024-01-01T12:00:00+00:00",
            "service": "user-api",
            "version": "1.0.0",
            "environment": "development",
            "database": {"status": "connected", "info": {...}}
        }
    """
    if not check_database_connection():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unavailable - database connectivity issues",
        )

    return {
        "status": "healthy",
        "timestamp": _timestamp(),
        "service": "user-api",
        "version": "1.0.0",
        "environment": settings.environment,
        "database": {"status": "connected", "info": get_database_info()},
    }


@router.get(
    "/ready",
    response_model=dict[str, Any],
    summary="Readiness probe",
)
async def readiness_probe() -> dict[str, Any]:
    """Readiness probe: the service accepts traffic once the database answers."""
    if not check_database_connection():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready - database unavailable",
        )

    return {"ready": True, "timestamp": _timestamp()}


@router.get(
    "/live",
    response_model=dict[str, Any],
    summary="Liveness probe",
)
async def liveness_probe() -> dict[str, Any]:
    return {"alive": True, "timestamp": _timestamp()}
