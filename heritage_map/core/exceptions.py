"""
Custom exceptions for the heritage map backend.

Every domain error carries a stable ``ErrorCode`` and an HTTP status so the
API layer can render it in the standard envelope without special cases.
Empty query results and a finished tour are not errors.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Geographic input errors
    INVALID_GEO_POINT = "INVALID_GEO_POINT"
    INVALID_RADIUS = "INVALID_RADIUS"

    # Catalog errors
    PLACE_NOT_FOUND = "PLACE_NOT_FOUND"

    # Tour errors
    TOUR_SESSION_NOT_FOUND = "TOUR_SESSION_NOT_FOUND"
    INVALID_TOUR_TRANSITION = "INVALID_TOUR_TRANSITION"
    TOUR_SESSION_LIMIT_EXCEEDED = "TOUR_SESSION_LIMIT_EXCEEDED"

    # System errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class HeritageMapException(Exception):
    """Base exception for the heritage map backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class InvalidGeoPointError(HeritageMapException):
    """Raised when a latitude/longitude pair is missing or out of range."""

    def __init__(self, message: str = "Invalid geographic point", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_GEO_POINT,
            details=details,
            status_code=400
        )


class InvalidRadiusError(HeritageMapException):
    """Raised when a radius is not one of the selectable options."""

    def __init__(self, radius_km: Any, allowed: Optional[list] = None):
        details = {"radius_km": radius_km}
        if allowed:
            details["allowed_radius_km"] = allowed

        super().__init__(
            message=f"Radius {radius_km} km is not a supported option",
            error_code=ErrorCode.INVALID_RADIUS,
            details=details,
            status_code=400
        )


class PlaceNotFoundError(HeritageMapException):
    """Raised when a place id does not exist in the catalog."""

    def __init__(self, place_id: str):
        super().__init__(
            message=f"Place '{place_id}' not found",
            error_code=ErrorCode.PLACE_NOT_FOUND,
            details={"place_id": place_id},
            status_code=404
        )


class TourSessionNotFoundError(HeritageMapException):
    """Raised when a tour session id is unknown or already ended."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Tour session '{session_id}' not found",
            error_code=ErrorCode.TOUR_SESSION_NOT_FOUND,
            details={"session_id": session_id},
            status_code=404
        )


class TourStateError(HeritageMapException):
    """Raised when a tour operation is not allowed from the current state."""

    def __init__(self, operation: str, state: str):
        super().__init__(
            message=f"Cannot {operation} a tour that is {state}",
            error_code=ErrorCode.INVALID_TOUR_TRANSITION,
            details={"operation": operation, "state": state},
            status_code=409
        )


class TourSessionLimitError(HeritageMapException):
    """Raised when the in-memory session store is full."""

    def __init__(self, max_sessions: int):
        super().__init__(
            message=f"Too many active tour sessions (limit {max_sessions})",
            error_code=ErrorCode.TOUR_SESSION_LIMIT_EXCEEDED,
            details={"max_sessions": max_sessions},
            status_code=503
        )
