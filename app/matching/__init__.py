"""Coach compatibility matching engine (pure, no I/O)."""

from app.matching.compatibility import rank, rank_with_scores, score, score_breakdown
from app.matching.geo import Coordinates, haversine_km, parse_coordinates

__all__ = [
    "Coordinates",
    "haversine_km",
    "parse_coordinates",
    "rank",
    "rank_with_scores",
    "score",
    "score_breakdown",
]
