"""Place catalog endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from heritage_map.core.db import get_db
from heritage_map.models.catalog import PlaceCategory
from heritage_map.schemas.base import Envelope
from heritage_map.schemas.place import PlaceRead
from heritage_map.services.catalog_repository import CatalogRepository

router = APIRouter(prefix="/places", tags=["places"])


@router.get("", response_model=Envelope[list[PlaceRead]])
async def list_places(
    category: Optional[PlaceCategory] = Query(None),
    db: Session = Depends(get_db),
):
    """
    List map places

    - **category**: Optional marker category filter (e.g. "Temple", "National Park")
    """
    places = CatalogRepository(db).list_places(category)
    return Envelope(status="ok", data=[PlaceRead(**p.to_dict()) for p in places])


@router.get("/categories", response_model=Envelope[list[str]])
async def list_categories():
    return Envelope(status="ok", data=[c.value for c in PlaceCategory])


@router.get("/{place_id}", response_model=Envelope[PlaceRead])
async def get_place(place_id: str, db: Session = Depends(get_db)):
    place = CatalogRepository(db).get_place(place_id)
    return Envelope(status="ok", data=PlaceRead(**place.to_dict()))
