"""
Coach matching endpoints.

Rank coaches for a member's query and filter them by skill level.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_matching_service
from app.models.enums import SkillLevel
from app.schemas.matching import CoachRankQuery, CoachSummary, RankedCoach, SkillRequirement
from app.services.matching_service import MatchingService

router = APIRouter()


@router.post("/rank", summary="Rank coaches by distance and skill overlap.", response_model=list[RankedCoach], )
def rank_coaches(query: CoachRankQuery, service: MatchingService = Depends(get_matching_service), ):
    return service.rank_coaches(query)


@router.get("/by-skill/{skill_id}", summary="Coaches holding a skill at a minimum level.",
            response_model=list[CoachSummary], )
def coaches_by_skill(skill_id: int, min_level: SkillLevel = SkillLevel.BEGINNER,
                     service: MatchingService = Depends(get_matching_service), ):
    return service.find_coaches_by_skill_level(skill_id, min_level)


@router.post("/by-skills", summary="Coaches meeting every skill requirement.", response_model=list[CoachSummary], )
def coaches_by_skills(requirements: list[SkillRequirement],
                      service: MatchingService = Depends(get_matching_service), ):
    return service.find_coaches_by_skills_and_levels(requirements)


@router.get("/by-skill/{skill_id}/grouped", summary="Coaches holding a skill, grouped by level.",
            response_model=dict[SkillLevel, list[CoachSummary]], )
def coaches_grouped_by_level(skill_id: int, service: MatchingService = Depends(get_matching_service), ):
    return service.group_coaches_by_skill_level(skill_id)
