"""
Health check and metrics endpoints.

- GET /api/v1/health: database and cache status
- GET /api/v1/metrics: nearby-search latency, cache and tour counters
"""

from fastapi import APIRouter, Request
from datetime import datetime, timezone
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from heritage_map.config.settings import get_settings
from heritage_map.core.cache_client import get_cache_client
from heritage_map.core.db import SessionLocal
from heritage_map.core.error_handlers import error_handler
from heritage_map.core.metrics import snapshot_metrics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health")
async def health_check(request: Request):
    """Health check with database and cache status."""
    settings = get_settings()
    details = {"database": {"status": "unknown"}, "cache": {"status": "unknown"}}

    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        details["database"] = {"status": "healthy"}
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        details["database"] = {"status": "unhealthy", "error": str(e)}

    cache = get_cache_client()
    if cache is None:
        details["cache"] = {"status": "disabled"}
    elif await cache.ping():
        details["cache"] = {"status": "healthy"}
    else:
        details["cache"] = {"status": "degraded", "message": "Cache unavailable, serving from database"}

    overall = "healthy" if details["database"]["status"] == "healthy" else "unhealthy"
    tour_service = getattr(request.app.state, "tour_service", None)

    return {
        "status": "ok",
        "data": {
            "health": overall,
            "version": settings.app_version,
            "environment": settings.environment.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "active_tours": len(tour_service.store) if tour_service else 0,
            "details": details,
        },
        "error": None,
    }


@router.get("/metrics")
async def get_metrics():
    return {
        "status": "ok",
        "data": {
            **snapshot_metrics(),
            "errors": error_handler.get_error_statistics(),
        },
        "error": None,
    }
