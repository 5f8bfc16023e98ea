"""Pydantic schemas for request/response validation."""

from app.schemas.actor import ActorRef
from app.schemas.session import SessionPayload
from app.schemas.request import (
    ConnectionRequestCreate,
    SessionRequestCreate,
    RequestResponse,
    TransitionResponse,
)
from app.schemas.matching import (
    SkillRef,
    CoachCandidate,
    CompatibilityScore,
    CoachRankQuery,
    RankedCoach,
    SkillRequirement,
    CoachSummary,
)

__all__ = [
    "ActorRef",
    "SessionPayload",
    "ConnectionRequestCreate",
    "SessionRequestCreate",
    "RequestResponse",
    "TransitionResponse",
    "SkillRef",
    "CoachCandidate",
    "CompatibilityScore",
    "CoachRankQuery",
    "RankedCoach",
    "SkillRequirement",
    "CoachSummary",
]
