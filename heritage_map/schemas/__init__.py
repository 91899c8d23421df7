from .base import Envelope
from .place import PlaceRead, NearbyResponse, RadiusOptions
from .tour import TourStartRequest, TourSessionRead, TourPlanEntry, TourPlanAddRequest

__all__ = [
    "Envelope",
    "PlaceRead",
    "NearbyResponse",
    "RadiusOptions",
    "TourStartRequest",
    "TourSessionRead",
    "TourPlanEntry",
    "TourPlanAddRequest",
]
