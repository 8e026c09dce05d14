"""Health check endpoints."""

import asyncio
import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.config import get_settings
from infrastructure.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


async def _check_database(db: AsyncSession) -> str:
    try:
        result = await asyncio.wait_for(db.execute(text("SELECT 1")), timeout=5.0)
        result.scalar()
        return "connected"
    except TimeoutError:
        logger.error("Health check DB timeout")
        return "error: database timeout"
    except Exception as e:
        logger.error("Health check DB error: %s", str(e))
        return "error: database check failed"


async def _check_redis() -> str:
    """Ping the rate-limit store. Not configured means in-memory limits."""
    if not settings.redis_url:
        return "not configured"

    import redis.asyncio as aioredis

    client = aioredis.from_url(settings.redis_url)
    try:
        await asyncio.wait_for(client.ping(), timeout=2.0)
        return "ok"
    except Exception as e:
        logger.warning("Health check Redis error: %s", str(e))
        return "degraded"
    finally:
        await client.aclose()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """Health check with database connectivity."""
    db_status = await _check_database(db)
    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": db_status,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Kubernetes-style readiness probe. Redis being down is tolerated."""
    db_ok = await _check_database(db) == "connected"
    return {
        "ready": db_ok,
        "database": "ok" if db_ok else "unavailable",
        "redis": await _check_redis(),
    }


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
