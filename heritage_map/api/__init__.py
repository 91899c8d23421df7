# API endpoints and routers

from .health_endpoints import router as health_router
from .places_endpoints import router as places_router
from .discovery_endpoints import router as discovery_router
from .tour_endpoints import router as tour_router
from .tour_plan_endpoints import router as tour_plan_router

__all__ = [
    "health_router",
    "places_router",
    "discovery_router",
    "tour_router",
    "tour_plan_router",
]
