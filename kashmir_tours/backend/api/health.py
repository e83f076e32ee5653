"""
Health Check Endpoints.

Provides liveness, readiness, and detailed health checks.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
- /health/detailed: Component status and connection pool metrics
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.database import get_engine, get_session_factory
from kashmir_tours.backend.core.logging import get_logger
from kashmir_tours.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    timeout = get_app_config().application.timeouts.health_check
    start = utc_now()
    try:
        async with asyncio.timeout(timeout):
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
    except Exception as e:
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


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 200 if ready to serve traffic, 503 if the database is unreachable.
    """
    checks = {"database": await check_database()}

    if checks["database"]["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }


@router.get("/health/detailed")
async def detailed_health_check() -> dict[str, Any]:
    """
    Detailed health check.

    Returns application identity, dependency checks and pool metrics.
    Always 200; read the status field.
    """
    checks = {"database": await check_database()}

    app_settings = get_app_config().application
    app_info = {
        "name": app_settings.name,
        "env": app_settings.environment,
        "debug": app_settings.debug,
        "version": app_settings.version,
    }

    overall_status = "healthy"
    if any(check.get("status") != "healthy" for check in checks.values()):
        overall_status = "unhealthy"

    return {
        "status": overall_status,
        "application": app_info,
        "checks": checks,
        "pools": _get_pool_status(),
        "timestamp": utc_now().isoformat(),
    }


def _get_pool_status() -> dict[str, Any]:
    """Collect connection pool metrics for health reporting."""
    try:
        pool = get_engine().pool
    except Exception as e:
        return {"database": {"status": "unavailable", "error": str(e)}}

    return {"database": {"class": type(pool).__name__, "status": pool.status()}}
