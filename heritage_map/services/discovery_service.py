"""Discovery service: hotels and artisan shops around the active place."""
import json
import logging
from typing import Optional

from sqlalchemy.orm import Session

from heritage_map.config.settings import get_settings
from heritage_map.core.cache_client import CacheClient, nearby_cache_key
from heritage_map.core.geo import GeoPoint, RadiusSetting, distance_km, filter_within_radius
from heritage_map.core.metrics import record_nearby_cache
from heritage_map.services.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


def google_maps_url(latitude: float, longitude: float) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={latitude},{longitude}"


class DiscoveryService:
    def __init__(self, db: Session, cache_client: Optional[CacheClient] = None):
        self.catalog = CatalogRepository(db)
        self.cache = cache_client

    async def nearby(
        self,
        place_id: Optional[str] = None,
        radius_km: Optional[float] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> dict:
        """
        Hotels and shops within ``radius_km`` of a place or an explicit point.

        Results keep catalog order; each entry carries its ``distance_km``.
        """
        radius = RadiusSetting.parse(
            get_settings().tour.default_radius_km if radius_km is None else radius_km
        ).value

        place = None
        if place_id:
            place = self.catalog.get_place(place_id)
            origin = place.location
            if origin is None:
                # raises InvalidGeoPointError for unusable stored coordinates
                origin = GeoPoint.from_optional(place.latitude, place.longitude)
            origin_key = f"place:{place_id}"
        else:
            origin = GeoPoint.from_optional(latitude, longitude)
            origin_key = f"{origin.latitude:.6f},{origin.longitude:.6f}"

        cache_key = nearby_cache_key(origin_key, radius)
        if self.cache is not None:
            cached = await self.cache.get(cache_key)
            record_nearby_cache(cached is not None)
            if cached:
                return json.loads(cached)

        hotels = []
        for hotel in filter_within_radius(origin, radius, self.catalog.list_hotels()):
            hotels.append({
                **hotel.to_dict(),
                "distance_km": distance_km(origin, hotel.location),
                "maps_url": google_maps_url(hotel.latitude, hotel.longitude),
            })

        shops = []
        for shop in filter_within_radius(origin, radius, self.catalog.list_shops()):
            shops.append({**shop.to_dict(), "distance_km": distance_km(origin, shop.location)})

        logger.info(
            f"Nearby search found {len(hotels)} hotels and {len(shops)} shops within {radius} km",
            extra={"origin": origin_key, "radius_km": radius},
        )

        result = {
            "place": place.to_dict() if place else None,
            "origin": {"latitude": origin.latitude, "longitude": origin.longitude},
            "radius_km": radius,
            "hotels": hotels,
            "shops": shops,
        }

        if self.cache is not None:
            await self.cache.set(
                cache_key, json.dumps(result), ttl_seconds=get_settings().redis.cache_ttl_seconds
            )
        return result
