"""
Catalog models: places shown on the map, hotels, and artisans with their shops.
"""
import enum
import uuid

from sqlalchemy import Column, String, Float, Text, DateTime, JSON
from sqlalchemy.sql import func

from heritage_map.core.db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class PlaceCategory(str, enum.Enum):
    """Map marker categories"""
    HERITAGE = "Heritage"
    TEMPLE = "Temple"
    MUSEUM = "Museum"
    NATURE = "Nature"
    FORT = "Fort"
    BEACH = "Beach"
    MARKET = "Market"
    PARK = "Park"
    TRANSPORT = "Transport"
    WILDLIFE = "Wildlife"
    NATIONAL_PARK = "National Park"
    VILLAGE = "Village"
    TOWN = "Town"
    VIEWPOINT = "Viewpoint"
    CULTURAL_SITE = "Cultural Site"
    PILGRIMAGE = "Pilgrimage"
    ARCHAEOLOGICAL = "Archaeological"
    HILLSTATION = "Hillstation"
    ENGINEERING = "Engineering"
    RELIGIOUS = "Religious"
    LAKE = "Lake"
    SHOPPING = "Shopping"

    @classmethod
    def coerce(cls, value) -> "PlaceCategory":
        """Unknown categories are drawn as Heritage on the map."""
        try:
            return cls(value)
        except ValueError:
            return cls.HERITAGE


class Place(Base):
    __tablename__ = "places"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    category = Column(String(64), nullable=False, default=PlaceCategory.HERITAGE.value)
    latitude = Column(Float, nullable=False, index=True)
    longitude = Column(Float, nullable=False, index=True)
    city = Column(String(128), nullable=True)
    description = Column(Text, nullable=True)
    images = Column(JSON, nullable=True)
    google_map_link = Column(String(512), nullable=True)


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    # hotel rows come from bulk imports and may lack coordinates
    latitude = Column(Float, nullable=True, index=True)
    longitude = Column(Float, nullable=True, index=True)
    rating = Column(Float, nullable=True)


class Artisan(Base):
    """
    An artisan and the shops they run.

    ``products`` is a JSON list of shops:
    ``{name, landmark, latitude, longitude, images, artifacts: [{name, price, images}]}``
    """
    __tablename__ = "artifacts"

    artisan_id = Column(String(36), primary_key=True, default=_uuid)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    products = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
