"""Business logic services."""

from app.services.geocoding_service import GeocodingService
from app.services.matching_service import MatchingService
from app.services.request_service import RequestService

__all__ = [
    "GeocodingService",
    "MatchingService",
    "RequestService",
]
