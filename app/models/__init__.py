"""SQLModel database models."""

from app.models.enums import ActorRole, RequestKind, RequestStatus, SkillLevel
from app.models.member import Member
from app.models.coach import Coach
from app.models.skill import Skill, CoachSkill
from app.models.member_coach import MemberCoach
from app.models.request import Request

__all__ = [
    "ActorRole",
    "RequestKind",
    "RequestStatus",
    "SkillLevel",
    "Member",
    "Coach",
    "Skill",
    "CoachSkill",
    "MemberCoach",
    "Request",
]
