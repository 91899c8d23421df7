"""
FastAPI dependencies shared by the routers.
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from heritage_map.core.cache_client import CacheClient, get_cache_client
from heritage_map.core.db import get_db
from heritage_map.services.discovery_service import DiscoveryService
from heritage_map.services.tour_plan_service import TourPlanService
from heritage_map.services.tour_service import TourService


def get_tour_service(request: Request) -> TourService:
    return request.app.state.tour_service


def get_discovery_service(
    db: Session = Depends(get_db),
    cache: Optional[CacheClient] = Depends(get_cache_client),
) -> DiscoveryService:
    return DiscoveryService(db, cache)


def get_tour_plan_service(db: Session = Depends(get_db)) -> TourPlanService:
    return TourPlanService(db)
