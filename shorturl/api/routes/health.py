"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shorturl.api import schemas
from shorturl.core.config import settings
from shorturl.db.base import DatabaseHealthCheck
from shorturl.db.session import get_db

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=schemas.HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check health of all system components."""
    database = await DatabaseHealthCheck.check_connection(db)

    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {"database": database},
    }


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(db: AsyncSession = Depends(get_db)):
    """Check if application is ready to handle requests."""
    database = await DatabaseHealthCheck.check_connection(db)
    components_status = {"api": True, "database": database["status"] == "healthy"}

    return {
        "ready": all(components_status.values()),
        "components": components_status
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
