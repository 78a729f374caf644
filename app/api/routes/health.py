"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from app.core.config import settings
from app.db.session import get_db

router = APIRouter(tags=["health"])


async def _check_database(db: AsyncSession) -> dict:
    start_time = time.perf_counter()
    try:
        result = await db.execute(text("SELECT 1"))
        healthy = result.scalar_one() == 1
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
    return {
        "status": "healthy" if healthy else "unhealthy",
        "latency_ms": round((time.perf_counter() - start_time) * 1000, 2),
    }


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check health of all system components."""
    database = await _check_database(db)
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
    components_status = {
        "api": True,
        "database": (await _check_database(db))["status"] == "healthy",
    }
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
