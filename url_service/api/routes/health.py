"""Health check endpoints for monitoring application status."""

import time
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from url_service.api.dependencies import get_health_check
from url_service.db.base import DatabaseHealthCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(
    request: Request,
    db_health: Optional[DatabaseHealthCheck] = Depends(get_health_check),
):
    """Check health of all system components."""
    settings = request.app.state.settings
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "components": {},
    }

    if db_health is not None:
        database = await db_health.check_connection()
        health_status["components"]["database"] = database
        if database["status"] != "healthy":
            health_status["status"] = "degraded"

    task_runner = request.app.state.task_runner
    health_status["components"]["background_tasks"] = {
        "status": "healthy",
        "pending": task_runner.pending,
    }

    return health_status


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(
    db_health: Optional[DatabaseHealthCheck] = Depends(get_health_check),
):
    """Check if application is ready to handle requests."""
    components_status = {"api": True, "database": True}

    if db_health is not None:
        database = await db_health.check_connection()
        components_status["database"] = database["status"] == "healthy"

    return {
        "ready": all(components_status.values()),
        "components": components_status,
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
