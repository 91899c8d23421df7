"""Discovery endpoints: hotels and artisan shops around a place."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from heritage_map.config.settings import get_settings
from heritage_map.core.dependencies import get_discovery_service
from heritage_map.core.geo import RadiusSetting
from heritage_map.core.metrics import record_nearby_latency
from heritage_map.schemas.base import Envelope
from heritage_map.schemas.place import NearbyResponse, RadiusOptions
from heritage_map.services.discovery_service import DiscoveryService

router = APIRouter(prefix="/discovery", tags=["discovery"])


@router.get("/radius-options", response_model=Envelope[RadiusOptions])
async def get_radius_options():
    return Envelope(
        status="ok",
        data=RadiusOptions(
            options_km=RadiusSetting.options(),
            default_km=get_settings().tour.default_radius_km,
        ),
    )


@router.get("/nearby", response_model=Envelope[NearbyResponse])
async def get_nearby(
    place_id: Optional[str] = Query(None),
    latitude: Optional[float] = Query(None),
    longitude: Optional[float] = Query(None),
    radius_km: Optional[float] = Query(None),
    service: DiscoveryService = Depends(get_discovery_service),
):
    """
    Hotels and artisan shops within a radius

    The origin is the selected place (**place_id**) or an explicit
    **latitude**/**longitude** pair. **radius_km** must be one of the radius
    options; it defaults to the configured default radius.
    """
    with record_nearby_latency():
        result = await service.nearby(
            place_id=place_id,
            radius_km=radius_km,
            latitude=latitude,
            longitude=longitude,
        )
    return Envelope(status="ok", data=NearbyResponse(**result))
