"""
Coach repository.

Profile lookup plus the skill queries used by the matching service.
"""

from collections import defaultdict
from typing import Optional

from sqlmodel import Session, select

from app.models.coach import Coach
from app.models.skill import CoachSkill


class CoachRepository:
    """Repository for Coach database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, coach_id: int) -> Optional[Coach]:
        return self.session.get(Coach, coach_id)

    def get_all(self) -> list[Coach]:
        statement = select(Coach).order_by(Coach.id)
        return list(self.session.exec(statement).all())

    def get_by_ids(self, coach_ids: list[int]) -> list[Coach]:
        if not coach_ids:
            return []
        statement = select(Coach).where(Coach.id.in_(coach_ids)).order_by(Coach.id)
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    def get_skills_by_coach(self, coach_ids: Optional[list[int]] = None) -> dict[int, list[CoachSkill]]:
        """Group coach/skill rows by coach id.

        Args:
            coach_ids: Restrict to these coaches (all coaches if ``None``).

        Returns:
            Mapping of coach id to its skill rows; coaches without skills
            are absent.
        """
        statement = select(CoachSkill)
        if coach_ids is not None:
            statement = statement.where(CoachSkill.coach_id.in_(coach_ids))
        grouped: dict[int, list[CoachSkill]] = defaultdict(list)
        for row in self.session.exec(statement.order_by(CoachSkill.coach_id, CoachSkill.skill_id)).all():
            grouped[row.coach_id].append(row)
        return dict(grouped)

    def get_skill_holders(self, skill_id: int) -> list[CoachSkill]:
        """All coach/skill rows for one skill."""
        statement = select(CoachSkill).where(CoachSkill.skill_id == skill_id).order_by(CoachSkill.coach_id)
        return list(self.session.exec(statement).all())
