"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable, tables present)
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from datetime import datetime
from typing import Dict, Any
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import get_session_local
from app.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity and that the mock tables exist"""
    start = time.time()
    try:
        session_factory = get_session_local()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
            await session.execute(text("SELECT COUNT(*) FROM endpoints"))

        latency = (time.time() - start) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(latency, 2),
            "connection": "ok",
        }
    except SQLAlchemyError as e:
        latency = (time.time() - start) * 1000
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round(latency, 2),
            "connection": "failed",
            "error": str(e),
        }


@router.get("/live")
async def liveness():
    return {"status": "alive", "timestamp": datetime.utcnow().isoformat()}


@router.get("/ready")
async def readiness():
    """Return 503 until the database answers"""
    database = await check_database()
    ready = database["status"] == "healthy"

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "environment": settings.ENVIRONMENT,
            "checks": {"database": database},
            "timestamp": datetime.utcnow().isoformat(),
        },
    )
