"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

- /health, /health/live: liveness (always 200 while the process runs)
- /health/db: database connectivity (skipped in in-memory mode)
- /health/ready: readiness (all dependencies healthy)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.api.dependencies import get_session
from hotel_booking.infrastructure.circuit_breaker import payment_breaker

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "hotel-booking-api"


async def _check_database(session: AsyncSession | None) -> str:
    if session is None:
        return "in_memory"
    result = await session.execute(text("SELECT 1"))
    result.scalar()
    return "healthy"


@router.get("/health")
async def health_check():
    """Basic liveness probe."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    """Alias for /health for Kubernetes liveness probe."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/db")
async def health_check_db(session: AsyncSession | None = Depends(get_session)):
    """
    Database connectivity health check.

    Returns 503 Service Unavailable if the database is down.
    """
    try:
        state = await _check_database(session)
    except Exception as e:
        logger.error("Database health check failed", exc_info=e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "component": "database",
                "error": "Database connection failed",
            },
        )
    return {"status": state, "component": "database"}


@router.get("/health/ready")
async def health_check_ready(session: AsyncSession | None = Depends(get_session)):
    """
    Readiness probe.

    The payment circuit state is reported but never blocks readiness: an
    open circuit only makes settlements fail fast.
    """
    health_status = {
        "status": "ready",
        "checks": {"payment_gateway": payment_breaker.current_state},
    }

    try:
        health_status["checks"]["database"] = await _check_database(session)
    except Exception as e:
        logger.error("Readiness check: Database unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["database"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status
