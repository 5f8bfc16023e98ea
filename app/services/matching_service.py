"""
Matching service.

Loads coaches and their skills, hands them to the pure scoring engine in
:mod:`app.matching.compatibility`, and answers skill-level filter queries.
"""

from typing import Optional

from sqlmodel import Session

from app.db.repositories.coach import CoachRepository
from app.matching.compatibility import rank_with_scores
from app.models.coach import Coach
from app.models.enums import SkillLevel
from app.models.skill import CoachSkill
from app.schemas.matching import CoachCandidate, CoachRankQuery, RankedCoach, SkillRef, SkillRequirement
from app.services.geocoding_service import GeocodingService


class MatchingService:
    """Service for coach ranking and skill filtering."""

    def __init__(self, session: Session, geocoder: Optional[GeocodingService] = None):
        self.repository = CoachRepository(session)
        self.geocoder = geocoder

    def rank_coaches(self, query: CoachRankQuery) -> list[RankedCoach]:
        """Rank every coach for the member's query, best first."""
        candidates = self.load_candidates()
        ranked = rank_with_scores(candidates, query.skill_ids, query.location)

        results = []
        for coach, score in ranked:
            place_name = None
            if query.resolve_place_names and self.geocoder is not None:
                place_name = self.geocoder.describe_location(coach.location)
            results.append(RankedCoach(coach=coach, score=score, place_name=place_name))
        return results

    def load_candidates(self) -> list[CoachCandidate]:
        coaches = self.repository.get_all()
        skills = self.repository.get_skills_by_coach()
        return [self._to_candidate(coach, skills.get(coach.id, [])) for coach in coaches]

    # ------------------------------------------------------------------
    # Skill-level filters
    # ------------------------------------------------------------------

    def find_coaches_by_skill_level(self, skill_id: int, min_level: SkillLevel) -> list[Coach]:
        """Coaches holding ``skill_id`` at ``min_level`` or above."""
        coach_ids = self._qualified_coach_ids(skill_id, min_level)
        return self.repository.get_by_ids(sorted(coach_ids))

    def find_coaches_by_skills_and_levels(self, requirements: list[SkillRequirement]) -> list[Coach]:
        """Coaches meeting *every* requirement (intersection)."""
        if not requirements:
            return []

        qualified: Optional[set[int]] = None
        for requirement in requirements:
            ids = self._qualified_coach_ids(requirement.skill_id, requirement.min_level)
            qualified = ids if qualified is None else qualified & ids
            if not qualified:
                return []

        return self.repository.get_by_ids(sorted(qualified))

    def group_coaches_by_skill_level(self, skill_id: int) -> dict[SkillLevel, list[Coach]]:
        """Coaches holding ``skill_id``, grouped by their level for it."""
        holders = self.repository.get_skill_holders(skill_id)
        coaches = {c.id: c for c in self.repository.get_by_ids([h.coach_id for h in holders])}

        grouped: dict[SkillLevel, list[Coach]] = {}
        for holder in holders:
            coach = coaches.get(holder.coach_id)
            if coach is not None:
                grouped.setdefault(holder.skill_level, []).append(coach)
        return grouped

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _qualified_coach_ids(self, skill_id: int, min_level: SkillLevel) -> set[int]:
        return {h.coach_id for h in self.repository.get_skill_holders(skill_id) if
                h.skill_level.is_at_least(min_level)}

    @staticmethod
    def _to_candidate(coach: Coach, skills: list[CoachSkill]) -> CoachCandidate:
        return CoachCandidate(id=coach.id, first_name=coach.first_name, last_name=coach.last_name,
                              location=coach.location,
                              skills=[SkillRef(skill_id=s.skill_id, level=s.skill_level) for s in skills], )
