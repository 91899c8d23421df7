"""
Catalog repository - loads places, hotels and artisan shops as points of interest
"""
import logging
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from heritage_map.core.exceptions import PlaceNotFoundError
from heritage_map.core.geo import PointOfInterest
from heritage_map.models.catalog import Place, Hotel, Artisan, PlaceCategory

logger = logging.getLogger(__name__)


def place_to_poi(place: Place) -> PointOfInterest:
    return PointOfInterest(
        id=place.id,
        name=place.name,
        latitude=place.latitude,
        longitude=place.longitude,
        category=PlaceCategory.coerce(place.category).value,
        attributes={
            "city": place.city,
            "description": place.description,
            "images": list(place.images or []),
            "google_map_link": place.google_map_link,
        },
    )


def hotel_to_poi(hotel: Hotel) -> PointOfInterest:
    return PointOfInterest(
        id=hotel.id,
        name=hotel.name,
        latitude=hotel.latitude,
        longitude=hotel.longitude,
        category="hotel",
        attributes={"rating": hotel.rating},
    )


def artisan_shops(artisan: Artisan) -> List[PointOfInterest]:
    """Flatten an artisan's shops, attaching the artisan's contact details."""
    contact = {
        "full_name": artisan.full_name,
        "email": artisan.email,
        "phone": artisan.phone,
    }
    shops = []
    for index, shop in enumerate(artisan.products or []):
        if not isinstance(shop, dict):
            logger.warning(
                f"Ignoring malformed shop entry {index} for artisan {artisan.artisan_id}"
            )
            continue
        shops.append(PointOfInterest(
            id=f"{artisan.artisan_id}:{index}",
            name=shop.get("name") or "",
            latitude=shop.get("latitude"),
            longitude=shop.get("longitude"),
            category="shop",
            attributes={
                "landmark": shop.get("landmark"),
                "images": list(shop.get("images") or []),
                "artifacts": list(shop.get("artifacts") or []),
                "artisan": contact,
            },
        ))
    return shops


class CatalogRepository:
    """Read access to the map catalog"""

    def __init__(self, db: Session):
        self.db = db

    def list_places(self, category: Optional[PlaceCategory] = None) -> List[PointOfInterest]:
        """
        List places in storage order

        Args:
            category: Optional category filter

        Returns:
            Places as points of interest
        """
        stmt = select(Place).order_by(Place.name, Place.id)
        places = [place_to_poi(p) for p in self.db.execute(stmt).scalars().all()]
        if category:
            # compare after coercion so unknown stored categories match Heritage
            places = [p for p in places if p.category == category.value]
        return places

    def get_place(self, place_id: str) -> PointOfInterest:
        place = self.db.get(Place, place_id)
        if place is None:
            raise PlaceNotFoundError(place_id)
        return place_to_poi(place)

    def list_hotels(self) -> List[PointOfInterest]:
        stmt = select(Hotel).order_by(Hotel.name, Hotel.id)
        return [hotel_to_poi(h) for h in self.db.execute(stmt).scalars().all()]

    def list_shops(self) -> List[PointOfInterest]:
        stmt = select(Artisan).order_by(Artisan.created_at, Artisan.artisan_id)
        shops: List[PointOfInterest] = []
        for artisan in self.db.execute(stmt).scalars().all():
            shops.extend(artisan_shops(artisan))
        return shops
