"""
Health Check Endpoints.

Provides liveness and readiness checks. Not under the /api prefix.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.dependencies import DbSession
from beyondnp.backend.core.logging import get_logger
from beyondnp.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_database(session: AsyncSession) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    start = utc_now()
    try:
        async with asyncio.timeout(READY_TIMEOUT_SECONDS):
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e) or type(e).__name__,
        }

    latency_ms = int((utc_now() - start).total_seconds() * 1000)
    return {
        "status": "healthy",
        "latency_ms": latency_ms,
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready", response_model=None)
async def readiness_check(db: DbSession) -> dict[str, Any] | JSONResponse:
    """
    Readiness check.

    Returns 200 if the database answers, 503 otherwise.
    """
    checks = {"database": await check_database(db)}
    body = {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

    if checks["database"]["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        body["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=body)

    return body
