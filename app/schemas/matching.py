"""
Compatibility matching schemas.

:class:`CoachCandidate` is the engine's view of a coach: id, stored
location string and skill set.  It is built from the ORM rows by
:class:`app.services.matching_service.MatchingService`.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import SkillLevel


class SkillRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill_id: int
    level: SkillLevel = SkillLevel.INTERMEDIATE


class CoachCandidate(BaseModel):
    """A coach as consumed by the scoring functions."""

    id: int
    first_name: str = ""
    last_name: str = ""
    location: Optional[str] = None
    skills: list[SkillRef] = Field(default_factory=list)

    @property
    def skill_ids(self) -> set[int]:
        return {s.skill_id for s in self.skills}


class CompatibilityScore(BaseModel):
    """Breakdown of a single coach's score."""

    distance_km: float
    closeness: float = Field(..., ge=0.0, le=1.0)
    match_count: int = Field(..., ge=0)
    skill_score: float = Field(..., ge=0.0, le=1.0)
    overall: float = Field(..., ge=0.0, le=1.0)


class CoachRankQuery(BaseModel):
    """A member's search: wanted skills plus where they are."""

    skill_ids: list[int] = Field(default_factory=list, description="Requested skill ids")
    location: Optional[str] = Field(
        None, description="'Latitude: <f>, Longitude: <f>' or '<lat>,<lng>'"
    )
    resolve_place_names: bool = Field(
        False, description="Reverse-geocode each coach's coordinates into a place name"
    )


class RankedCoach(BaseModel):
    coach: CoachCandidate
    score: CompatibilityScore
    place_name: Optional[str] = None


class SkillRequirement(BaseModel):
    skill_id: int
    min_level: SkillLevel = SkillLevel.BEGINNER


class CoachSummary(BaseModel):
    """Schema for a coach in filter results."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    profile_pic: Optional[str]
    location: Optional[str]
