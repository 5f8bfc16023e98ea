"""
Shared API dependencies.

Reusable FastAPI dependencies for database access and services.
"""

from typing import Generator

import httpx
from fastapi import Depends
from sqlmodel import Session

from app.core.config import settings
from app.db.session import get_db
from app.services.geocoding_service import GeocodingService
from app.services.matching_service import MatchingService
from app.services.request_service import RequestService


def get_request_service(db: Session = Depends(get_db)) -> RequestService:
    return RequestService(db)


def get_geocoding_service() -> Generator[GeocodingService, None, None]:
    """One HTTP client per API call, closed when the response is sent."""
    with httpx.Client(timeout=settings.GEOCODING_TIMEOUT_SECONDS) as client:
        yield GeocodingService(client)


def get_matching_service(db: Session = Depends(get_db),
                         geocoder: GeocodingService = Depends(get_geocoding_service), ) -> MatchingService:
    return MatchingService(db, geocoder)
