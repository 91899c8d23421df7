"""
SQLAlchemy models for the heritage map backend.
"""

from .catalog import Place, Hotel, Artisan, PlaceCategory
from .consumer import ConsumerProfile

__all__ = [
    "Place",
    "Hotel",
    "Artisan",
    "PlaceCategory",
    "ConsumerProfile",
]
