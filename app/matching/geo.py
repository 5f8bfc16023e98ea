"""
Coordinate parsing and great-circle distance.

Coach and member locations are stored as free-text coordinate strings in
one of two shapes::

    Latitude: 42.02384529218001, Longitude: -93.64541386213286
    42.02384529218001,-93.64541386213286

Parsing returns ``None`` for anything else.  ``0.0`` is never used as a
failure value here: ``(0, 0)`` is a real place.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple, Optional

EARTH_RADIUS_KM = 6371.0

# Stored coordinates are rounded to 5 decimal places (~1 m).
_PRECISION = 5

_FLOAT = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"

_LABELLED_RE = re.compile(
    rf"^\s*latitude\s*:\s*(?P<lat>{_FLOAT})\s*,\s*longitude\s*:\s*(?P<lng>{_FLOAT})\s*$",
    re.IGNORECASE,
)
_BARE_RE = re.compile(rf"^\s*(?P<lat>{_FLOAT})\s*,\s*(?P<lng>{_FLOAT})\s*$")


class Coordinates(NamedTuple):
    latitude: float
    longitude: float


def _in_range(lat: float, lng: float) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def parse_coordinates(value: Optional[str]) -> Optional[Coordinates]:
    """Parse a stored coordinate string.

    Args:
        value: Raw location string, possibly ``None`` or empty.

    Returns:
        :class:`Coordinates` rounded to 5 decimals, or ``None`` when the
        string is missing, malformed or out of range.
    """
    if not value:
        return None

    match = _LABELLED_RE.match(value) or _BARE_RE.match(value)
    if match is None:
        return None

    lat = float(match.group("lat"))
    lng = float(match.group("lng"))
    if not _in_range(lat, lng):
        return None

    return Coordinates(round(lat, _PRECISION), round(lng, _PRECISION))


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points, in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2)
    # Rounding can push near-antipodal points just past 1.0
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
