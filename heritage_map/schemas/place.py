from pydantic import BaseModel, Field
from typing import Optional


class PlaceRead(BaseModel):
    id: str
    name: str
    category: str
    latitude: float
    longitude: float
    city: Optional[str] = None
    description: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    google_map_link: Optional[str] = None


class GeoPointRead(BaseModel):
    latitude: float
    longitude: float


class HotelNearby(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    rating: Optional[float] = None
    distance_km: float
    maps_url: str


class ArtifactRead(BaseModel):
    name: str
    price: Optional[str] = None
    images: list[str] = Field(default_factory=list)


class ArtisanContact(BaseModel):
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class ShopNearby(BaseModel):
    id: str
    name: str
    landmark: Optional[str] = None
    latitude: float
    longitude: float
    images: list[str] = Field(default_factory=list)
    artifacts: list[ArtifactRead] = Field(default_factory=list)
    artisan: ArtisanContact
    distance_km: float


class NearbyResponse(BaseModel):
    place: Optional[PlaceRead] = None
    origin: GeoPointRead
    radius_km: float
    hotels: list[HotelNearby]
    shops: list[ShopNearby]


class RadiusOptions(BaseModel):
    options_km: list[float]
    default_km: float
