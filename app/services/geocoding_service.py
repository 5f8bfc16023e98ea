"""
Geocoding service.

Parses stored coordinate strings and reverse-resolves coordinates to a
human-readable place name through the OpenStreetMap Nominatim API.

The HTTP client is injected and every call is bounded by a timeout; any
transport or HTTP failure degrades to ``ERROR_RETRIEVING_LOCATION`` and
never propagates to the caller.
"""

from typing import Optional

import httpx

from app.core.config import settings
from app.core.logging import get_logger
from app.matching.geo import parse_coordinates

logger = get_logger(__name__)

LOCATION_NOT_FOUND = "Location not found"
ERROR_RETRIEVING_LOCATION = "Error retrieving location"


def parse_latitude(coordinate_string: Optional[str]) -> float:
    """Latitude from a coordinate string, ``0.0`` if it cannot be parsed.

    ``0.0`` is ambiguous (it is also the equator); prefer
    :func:`app.matching.geo.parse_coordinates` when the difference matters.
    """
    coordinates = parse_coordinates(coordinate_string)
    return coordinates.latitude if coordinates else 0.0


def parse_longitude(coordinate_string: Optional[str]) -> float:
    """Longitude from a coordinate string, ``0.0`` if it cannot be parsed."""
    coordinates = parse_coordinates(coordinate_string)
    return coordinates.longitude if coordinates else 0.0


class GeocodingService:
    """Reverse geocoding over an injected HTTP client."""

    def __init__(self, client: httpx.Client, base_url: Optional[str] = None, user_agent: Optional[str] = None,
                 timeout: Optional[float] = None, ):
        """
        Args:
            client: HTTP client owned by the caller
            base_url: Nominatim base URL (defaults to settings)
            user_agent: User-Agent header, required by Nominatim's usage policy
            timeout: Per-call timeout in seconds
        """
        self.client = client
        self.base_url = (base_url or settings.GEOCODING_BASE_URL).rstrip("/")
        self.user_agent = user_agent or settings.GEOCODING_USER_AGENT
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT_SECONDS

    def reverse_geocode(self, latitude: float, longitude: float) -> str:
        """
        Resolve coordinates to ``"City, State"``.

        Returns:
            The place name, ``LOCATION_NOT_FOUND`` if the service has no
            address for the point, or ``ERROR_RETRIEVING_LOCATION`` on failure
        """
        params = {"format": "json", "lat": latitude, "lon": longitude, "zoom": 10}
        try:
            response = self.client.get(f"{self.base_url}/reverse", params=params,
                                       headers={"User-Agent": self.user_agent}, timeout=self.timeout, )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Reverse geocoding failed for (%s, %s): %s", latitude, longitude, e)
            return ERROR_RETRIEVING_LOCATION

        if not isinstance(body, dict) or not isinstance(body.get("address"), dict):
            return LOCATION_NOT_FOUND

        return self._format_address(body["address"])

    def describe_location(self, coordinate_string: Optional[str]) -> str:
        """Place name for a stored coordinate string.

        Unparsable strings short-circuit to ``LOCATION_NOT_FOUND`` without
        a network call.
        """
        coordinates = parse_coordinates(coordinate_string)
        if coordinates is None:
            return LOCATION_NOT_FOUND
        return self.reverse_geocode(coordinates.latitude, coordinates.longitude)

    @staticmethod
    def _format_address(address: dict) -> str:
        city = address.get("city") or address.get("town") or address.get("village") or "Unknown"
        state = address.get("state") or address.get("county") or ""
        if state:
            return f"{city}, {state}"
        return city
