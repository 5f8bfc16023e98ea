"""
Coach compatibility scoring.

Ranks coaches for a member's query by combining two terms:

- **closeness**: haversine distance between member and coach, mapped
  linearly onto 0..1 with a 300 km horizon::

      closeness = max(0, 1 - distance_km / 300)

- **skill overlap**: how many of the requested skills the coach holds
  (level ignored), saturating at 5::

      skill_score = min(1, match_count / 5)

The composite is ``0.7 * closeness + 0.3 * skill_score`` and always lies
in [0, 1].

Design choices
--------------

1. **Never raise**: a missing or unparsable location on either side is
   scored as the 300 km ceiling; an empty skill list scores 0.  ``rank``
   therefore always returns every coach.
2. **Fixed weights**: the 0.7/0.3 split, the horizon and the saturation
   point are module constants, not per-call parameters.
3. **Stable ordering**: coaches with equal scores keep their input order.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from app.core.logging import get_logger
from app.matching.geo import Coordinates, haversine_km, parse_coordinates
from app.schemas.matching import CoachCandidate, CompatibilityScore

logger = get_logger(__name__)

# ======================================================================
# Constants
# ======================================================================

DISTANCE_WEIGHT = 0.7
SKILLS_WEIGHT = 0.3

# Distances beyond this are all equally bad (km).
MAX_RELEVANT_DISTANCE_KM = 300.0

# Matching more skills than this earns no extra credit.
SKILL_SATURATION = 5


# ======================================================================
# Terms
# ======================================================================


def coach_distance_km(coach: CoachCandidate, origin: Optional[Coordinates]) -> float:
    """Distance from ``origin`` to the coach, or the ceiling if either is unknown."""
    if origin is None:
        return MAX_RELEVANT_DISTANCE_KM

    coach_position = parse_coordinates(coach.location)
    if coach_position is None:
        return MAX_RELEVANT_DISTANCE_KM

    return haversine_km(origin.latitude, origin.longitude, coach_position.latitude, coach_position.longitude)


def closeness(distance_km: float) -> float:
    """Map a distance onto 0..1 (0 km → 1.0, ≥ 300 km → 0.0)."""
    return max(0.0, 1.0 - distance_km / MAX_RELEVANT_DISTANCE_KM)


def count_skill_matches(coach: CoachCandidate, requested_skill_ids: Iterable[int]) -> int:
    """Number of distinct requested skills the coach holds."""
    held = coach.skill_ids
    return sum(1 for skill_id in set(requested_skill_ids) if skill_id in held)


def skill_score(match_count: int) -> float:
    return min(1.0, match_count / SKILL_SATURATION)


# ======================================================================
# Composite
# ======================================================================


def _score_from_origin(coach: CoachCandidate, requested_skill_ids: Sequence[int],
                       origin: Optional[Coordinates], ) -> CompatibilityScore:
    distance = coach_distance_km(coach, origin)
    distance_term = closeness(distance)

    matches = count_skill_matches(coach, requested_skill_ids)
    skill_term = skill_score(matches)

    overall = DISTANCE_WEIGHT * distance_term + SKILLS_WEIGHT * skill_term

    logger.debug("Coach %s: distance=%.2fkm (score=%.2f), skills=%d (score=%.2f), overall=%.2f", coach.id, distance,
                 distance_term, matches, skill_term, overall)

    return CompatibilityScore(distance_km=distance, closeness=distance_term, match_count=matches,
                              skill_score=skill_term, overall=min(1.0, overall), )


def score_breakdown(coach: CoachCandidate, requested_skill_ids: Sequence[int], requester_lat: Optional[float],
                    requester_lng: Optional[float], ) -> CompatibilityScore:
    """Full scoring breakdown for one coach.

    Args:
        coach: Coach to evaluate.
        requested_skill_ids: Skill ids the member asked for.
        requester_lat: Member latitude, ``None`` if unknown.
        requester_lng: Member longitude, ``None`` if unknown.

    Returns:
        :class:`CompatibilityScore` with every intermediate term.
    """
    origin = None
    if requester_lat is not None and requester_lng is not None:
        origin = Coordinates(requester_lat, requester_lng)
    return _score_from_origin(coach, requested_skill_ids, origin)


def score(coach: CoachCandidate, requested_skill_ids: Sequence[int], requester_lat: Optional[float],
          requester_lng: Optional[float], ) -> float:
    """Composite compatibility score in [0, 1] (higher is better)."""
    return score_breakdown(coach, requested_skill_ids, requester_lat, requester_lng).overall


# ======================================================================
# Ranking
# ======================================================================


def rank_with_scores(coaches: Iterable[CoachCandidate], requested_skill_ids: Sequence[int],
                     requester_location: Optional[str], ) -> list[tuple[CoachCandidate, CompatibilityScore]]:
    """Score every coach and sort best-first, keeping the breakdowns."""
    origin = parse_coordinates(requester_location)
    if origin is None:
        logger.debug("Requester location %r is unknown; ranking on skills only", requester_location)

    scored = [(coach, _score_from_origin(coach, requested_skill_ids, origin)) for coach in coaches]
    # sorted() is stable, also with reverse=True
    return sorted(scored, key=lambda pair: pair[1].overall, reverse=True)


def rank(coaches: Iterable[CoachCandidate], requested_skill_ids: Sequence[int],
         requester_location: Optional[str], ) -> list[CoachCandidate]:
    """Sort coaches by descending compatibility with the member's query.

    Args:
        coaches: Candidates to rank (not mutated).
        requested_skill_ids: Skill ids the member asked for.
        requester_location: Member's coordinate string.

    Returns:
        A new list with the best match first.
    """
    return [coach for coach, _ in rank_with_scores(coaches, requested_skill_ids, requester_location)]
