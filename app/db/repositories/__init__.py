"""Database repositories."""

from app.db.repositories.coach import CoachRepository
from app.db.repositories.member import MemberRepository
from app.db.repositories.member_coach import MemberCoachRepository
from app.db.repositories.request import RequestRepository

__all__ = [
    "CoachRepository",
    "MemberRepository",
    "MemberCoachRepository",
    "RequestRepository",
]
