"""
Unit tests for nearby hotel and shop discovery
"""
import json

import pytest

from heritage_map.core.exceptions import InvalidGeoPointError, InvalidRadiusError, PlaceNotFoundError
from heritage_map.services.discovery_service import DiscoveryService, google_maps_url


class FakeCache:
    def __init__(self):
        self.values = {}
        self.gets = 0

    async def get(self, key):
        self.gets += 1
        return self.values.get(key)

    async def set(self, key, value, ttl_seconds=None):
        self.values[key] = value
        return True


@pytest.mark.asyncio
async def test_nearby_within_five_km(seeded_db):
    result = await DiscoveryService(seeded_db).nearby(place_id="place-a", radius_km=5)

    assert result["place"]["id"] == "place-a"
    assert result["radius_km"] == 5.0
    assert [h["id"] for h in result["hotels"]] == ["hotel-1", "hotel-2"]
    assert [s["id"] for s in result["shops"]] == ["artisan-1:0"]
    assert all(h["distance_km"] <= 5.0 for h in result["hotels"])
    assert result["hotels"][0]["maps_url"] == google_maps_url(22.5730, 88.3640)


@pytest.mark.asyncio
async def test_nearby_smallest_radius(seeded_db):
    result = await DiscoveryService(seeded_db).nearby(place_id="place-a", radius_km=0.3)
    assert [h["id"] for h in result["hotels"]] == ["hotel-1"]
    assert [s["name"] for s in result["shops"]] == ["Ghat Pottery"]


@pytest.mark.asyncio
async def test_nearby_defaults_to_two_km(seeded_db):
    result = await DiscoveryService(seeded_db).nearby(place_id="place-a")
    assert result["radius_km"] == 2.0
    assert [h["id"] for h in result["hotels"]] == ["hotel-1"]


@pytest.mark.asyncio
async def test_nearby_from_explicit_point(seeded_db):
    result = await DiscoveryService(seeded_db).nearby(latitude=23.5, longitude=89.0, radius_km=1)
    assert result["place"] is None
    assert result["origin"] == {"latitude": 23.5, "longitude": 89.0}
    assert [h["id"] for h in result["hotels"]] == ["hotel-3"]
    assert [s["name"] for s in result["shops"]] == ["Lakeside Weaves"]


@pytest.mark.asyncio
async def test_nearby_empty_result_is_not_an_error(seeded_db):
    result = await DiscoveryService(seeded_db).nearby(latitude=0.0, longitude=0.0, radius_km=5)
    assert result["hotels"] == []
    assert result["shops"] == []


@pytest.mark.asyncio
async def test_nearby_rejects_unknown_radius(seeded_db):
    with pytest.raises(InvalidRadiusError):
        await DiscoveryService(seeded_db).nearby(place_id="place-a", radius_km=4)


@pytest.mark.asyncio
async def test_nearby_requires_an_origin(seeded_db):
    with pytest.raises(InvalidGeoPointError):
        await DiscoveryService(seeded_db).nearby(latitude=22.5)


@pytest.mark.asyncio
async def test_nearby_unknown_place(seeded_db):
    with pytest.raises(PlaceNotFoundError):
        await DiscoveryService(seeded_db).nearby(place_id="missing", radius_km=1)


@pytest.mark.asyncio
async def test_nearby_uses_cache(seeded_db):
    cache = FakeCache()
    service = DiscoveryService(seeded_db, cache)

    first = await service.nearby(place_id="place-a", radius_km=5)
    assert "nearby:place:place-a:5.0" in cache.values
    assert json.loads(cache.values["nearby:place:place-a:5.0"]) == first

    cache.values["nearby:place:place-a:5.0"] = json.dumps({"cached": True})
    assert await service.nearby(place_id="place-a", radius_km=5) == {"cached": True}
    assert cache.gets == 2
