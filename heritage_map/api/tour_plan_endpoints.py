"""
Tour plan endpoints - a consumer's saved list of places to visit
"""
from fastapi import APIRouter, Depends

from heritage_map.core.dependencies import get_tour_plan_service
from heritage_map.schemas.base import Envelope
from heritage_map.schemas.tour import TourPlanAddRequest, TourPlanEntry
from heritage_map.services.tour_plan_service import TourPlanService

router = APIRouter(prefix="/consumers/{consumer_id}/tour-plan", tags=["tour-plan"])


@router.get("", response_model=Envelope[list[TourPlanEntry]])
async def get_tour_plan(consumer_id: str, service: TourPlanService = Depends(get_tour_plan_service)):
    return Envelope(status="ok", data=service.list_places(consumer_id))


@router.post("", response_model=Envelope[list[TourPlanEntry]])
async def add_to_tour_plan(
    consumer_id: str,
    request: TourPlanAddRequest,
    service: TourPlanService = Depends(get_tour_plan_service),
):
    """Add a place to the plan; adding an already planned place changes nothing"""
    return Envelope(status="ok", data=service.add_place(consumer_id, request.place_id))


@router.delete("/{place_id}", response_model=Envelope[list[TourPlanEntry]])
async def remove_from_tour_plan(
    consumer_id: str,
    place_id: str,
    service: TourPlanService = Depends(get_tour_plan_service),
):
    return Envelope(status="ok", data=service.remove_place(consumer_id, place_id))
