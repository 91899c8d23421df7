"""
FastAPI application setup.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from heritage_map.config import get_settings
from heritage_map.core.cache_client import close_cache_client
from heritage_map.core.db import create_tables
from heritage_map.core.error_handlers import setup_error_handlers
from heritage_map.core.logging import configure_logging
from heritage_map.middleware import RequestContextMiddleware
from heritage_map.services.tour_service import TourService

settings = get_settings()

configure_logging(settings.log_level.value)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup creates missing tables; shutdown cancels tour timers and closes the cache.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    if settings.database.create_tables:
        create_tables()

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Shutting down application")
        app.state.tour_service.shutdown()
        await close_cache_client()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    # Tour sessions live for the life of the application instance
    app.state.tour_service = TourService()

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from heritage_map.api import (
        health_router,
        places_router,
        discovery_router,
        tour_router,
        tour_plan_router,
    )
    app.include_router(health_router)
    app.include_router(places_router)
    app.include_router(discovery_router)
    app.include_router(tour_router)
    app.include_router(tour_plan_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    return app


# Create application instance
app = create_app()
