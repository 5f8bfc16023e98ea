"""Enumerations shared by the database models and API schemas."""

from enum import Enum


class ActorRole(str, Enum):
    """Which kind of profile an actor id refers to."""

    MEMBER = "MEMBER"
    COACH = "COACH"


class RequestStatus(str, Enum):
    """Request state machine.

    PENDING is the only non-terminal state.
    """

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


class RequestKind(str, Enum):
    CONNECTION = "CONNECTION"
    SESSION = "SESSION"


class SkillLevel(str, Enum):
    """Coach proficiency for a skill, declared lowest first."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"

    @property
    def rank(self) -> int:
        return list(SkillLevel).index(self)

    def is_at_least(self, other: "SkillLevel") -> bool:
        return self.rank >= other.rank
