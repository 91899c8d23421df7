"""
Catalog seeding from a JSON document.

Expected shape::

    {
      "places":   [{"id", "name", "category", "lat", "lon", "city", "description", "images", "google_map_link"}],
      "hotels":   [{"id", "name", "lat", "lon", "rating"}],
      "artisans": [{"artisan_id", "full_name", "email", "phone", "products": [...]}]
    }

``lat``/``lon`` and ``latitude``/``longitude`` are both accepted. Rows are
upserted by primary key so a seed file can be re-applied.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from sqlalchemy.orm import Session

from heritage_map.models.catalog import Place, Hotel, Artisan, PlaceCategory

logger = logging.getLogger(__name__)


def _coords(row: Dict[str, Any]):
    lat = row.get("latitude", row.get("lat"))
    lon = row.get("longitude", row.get("lon"))
    return lat, lon


def load_catalog(db: Session, payload: Dict[str, Any]) -> Dict[str, int]:
    counts = {"places": 0, "hotels": 0, "artisans": 0}

    for row in payload.get("places", []):
        lat, lon = _coords(row)
        db.merge(Place(
            id=row["id"],
            name=row["name"],
            category=PlaceCategory.coerce(row.get("category")).value,
            latitude=lat,
            longitude=lon,
            city=row.get("city"),
            description=row.get("description"),
            images=row.get("images") or [],
            google_map_link=row.get("google_map_link"),
        ))
        counts["places"] += 1

    for row in payload.get("hotels", []):
        lat, lon = _coords(row)
        db.merge(Hotel(
            id=row["id"],
            name=row["name"],
            latitude=lat,
            longitude=lon,
            rating=row.get("rating"),
        ))
        counts["hotels"] += 1

    for row in payload.get("artisans", []):
        db.merge(Artisan(
            artisan_id=row["artisan_id"],
            full_name=row["full_name"],
            email=row.get("email"),
            phone=row.get("phone"),
            products=row.get("products") or [],
        ))
        counts["artisans"] += 1

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Seeded {counts['places']} places, {counts['hotels']} hotels, {counts['artisans']} artisans",
        extra=counts,
    )
    return counts


def load_catalog_file(db: Session, path: Union[str, Path]) -> Dict[str, int]:
    with open(path, "r", encoding="utf-8") as f:
        return load_catalog(db, json.load(f))
