"""
Tour endpoints - tour-guide mode sessions
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from heritage_map.core.db import get_db
from heritage_map.core.dependencies import get_tour_service
from heritage_map.schemas.base import Envelope
from heritage_map.schemas.tour import TourStartRequest, TourSessionRead
from heritage_map.services.catalog_repository import CatalogRepository
from heritage_map.services.tour_service import TourRecord, TourService

router = APIRouter(prefix="/tours", tags=["tours"])


def _envelope(record: TourRecord) -> Envelope[TourSessionRead]:
    return Envelope(
        status="ok",
        data=TourSessionRead.from_session(record.session, autoplay=record.autoplay),
    )


@router.post("", response_model=Envelope[TourSessionRead], status_code=status.HTTP_201_CREATED)
async def start_tour(
    request: TourStartRequest,
    db: Session = Depends(get_db),
    service: TourService = Depends(get_tour_service),
):
    """
    Start a tour at a place

    - **place_id**: Starting place; it counts as the first visited stop
    - **autoplay**: Fly to the nearest unvisited place on every timer tick
    """
    catalog = CatalogRepository(db)
    origin = catalog.get_place(request.place_id)
    record = service.start_tour(catalog.list_places(), origin, autoplay=request.autoplay)
    return _envelope(record)


@router.get("/{session_id}", response_model=Envelope[TourSessionRead])
async def get_tour(session_id: str, service: TourService = Depends(get_tour_service)):
    return _envelope(service.get(session_id))


@router.post("/{session_id}/start", response_model=Envelope[TourSessionRead])
async def restart_tour(
    session_id: str,
    request: TourStartRequest,
    db: Session = Depends(get_db),
    service: TourService = Depends(get_tour_service),
):
    """Start a reset (idle) tour again from a place, keeping its session id"""
    service.get(session_id)
    catalog = CatalogRepository(db)
    origin = catalog.get_place(request.place_id)
    record = service.restart(session_id, catalog.list_places(), origin, autoplay=request.autoplay)
    return _envelope(record)


@router.post("/{session_id}/advance", response_model=Envelope[TourSessionRead])
async def advance_tour(session_id: str, service: TourService = Depends(get_tour_service)):
    """Move to the nearest unvisited place (no-op unless the tour is flying)"""
    return _envelope(service.advance(session_id))


@router.post("/{session_id}/pause", response_model=Envelope[TourSessionRead])
async def pause_tour(session_id: str, service: TourService = Depends(get_tour_service)):
    return _envelope(service.pause(session_id))


@router.post("/{session_id}/resume", response_model=Envelope[TourSessionRead])
async def resume_tour(session_id: str, service: TourService = Depends(get_tour_service)):
    return _envelope(service.resume(session_id))


@router.post("/{session_id}/reset", response_model=Envelope[TourSessionRead])
async def reset_tour(session_id: str, service: TourService = Depends(get_tour_service)):
    return _envelope(service.reset(session_id))


@router.delete("/{session_id}", response_model=Envelope[None])
async def end_tour(session_id: str, service: TourService = Depends(get_tour_service)):
    service.end(session_id)
    return Envelope(status="ok", data=None)
