"""
Shared fixtures: an in-memory SQLite catalog around Kolkata.

Places A, B and C sit at increasing distance from A:
A (22.5726, 88.3639), B (22.6, 88.4) about 4.8 km away, C (23.5, 89.0) about 122 km away.
"""
import os

# Must be set before heritage_map.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi.testclient import TestClient

from heritage_map.core.db import SessionLocal, create_tables, drop_tables
from heritage_map.core.geo import PointOfInterest
from heritage_map.services.catalog_seed import load_catalog

PLACE_A = "place-a"
PLACE_B = "place-b"
PLACE_C = "place-c"

CATALOG = {
    "places": [
        {"id": PLACE_A, "name": "Alpha Ghat", "category": "Heritage", "lat": 22.5726, "lon": 88.3639, "city": "Kolkata"},
        {"id": PLACE_B, "name": "Bravo Temple", "category": "Temple", "lat": 22.6, "lon": 88.4, "city": "Kolkata"},
        {"id": PLACE_C, "name": "Charlie Lake", "category": "Lake", "lat": 23.5, "lon": 89.0},
    ],
    "hotels": [
        {"id": "hotel-1", "name": "Alpha Inn", "lat": 22.5730, "lon": 88.3640, "rating": 4.5},
        {"id": "hotel-2", "name": "Bravo Residency", "lat": 22.6, "lon": 88.4},
        {"id": "hotel-3", "name": "Charlie Resort", "lat": 23.5, "lon": 89.0, "rating": 3.9},
        {"id": "hotel-4", "name": "Delta Unmapped", "lat": None, "lon": None},
    ],
    "artisans": [
        {
            "artisan_id": "artisan-1",
            "full_name": "Mitali Das",
            "email": "mitali@example.com",
            "phone": "+91-9000000002",
            "products": [
                {
                    "name": "Ghat Pottery",
                    "landmark": "Next to Alpha Ghat",
                    "latitude": 22.5740,
                    "longitude": 88.3650,
                    "images": ["https://img.example.com/pottery.jpg"],
                    "artifacts": [{"name": "Clay lamp", "price": "120", "images": []}],
                },
                {
                    "name": "Lakeside Weaves",
                    "landmark": "Charlie Lake east bank",
                    "latitude": 23.5,
                    "longitude": 89.0,
                    "images": [],
                    "artifacts": [],
                },
                {"name": "Pop-up Stall", "landmark": "Unknown", "images": [], "artifacts": []},
            ],
        }
    ],
}


def make_poi(poi_id: str, lat, lon, name: str = None) -> PointOfInterest:
    return PointOfInterest(id=poi_id, name=name or poi_id, latitude=lat, longitude=lon)


@pytest.fixture
def kolkata_pois():
    """A, B, C from the Kolkata scenario, in that order."""
    return [
        make_poi("A", 22.5726, 88.3639),
        make_poi("B", 22.6, 88.4),
        make_poi("C", 23.5, 89.0),
    ]


@pytest.fixture
def db_session():
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables()


@pytest.fixture
def seeded_db(db_session):
    load_catalog(db_session, CATALOG)
    return db_session


@pytest.fixture
def client(seeded_db):
    from heritage_map.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
