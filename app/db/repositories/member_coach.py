"""
Member/coach relationship repository.

:meth:`MemberCoachRepository.add_if_absent` only stages the row; the caller
owns the transaction.
"""

from sqlmodel import Session, select

from app.models.member_coach import MemberCoach


class MemberCoachRepository:
    """Repository for MemberCoach database operations."""

    def __init__(self, session: Session):
        self.session = session

    def exists(self, member_id: int, coach_id: int) -> bool:
        return self.session.get(MemberCoach, (member_id, coach_id)) is not None

    def add_if_absent(self, member_id: int, coach_id: int) -> bool:
        """Stage a new link unless one exists.

        Returns:
            True if a row was staged, False if the pair was already linked.
        """
        if self.exists(member_id, coach_id):
            return False
        self.session.add(MemberCoach(member_id=member_id, coach_id=coach_id))
        self.session.flush()
        return True

    def list_coach_ids_for_member(self, member_id: int) -> list[int]:
        statement = select(MemberCoach.coach_id).where(MemberCoach.member_id == member_id).order_by(
            MemberCoach.coach_id)
        return list(self.session.exec(statement).all())

    def list_member_ids_for_coach(self, coach_id: int) -> list[int]:
        statement = select(MemberCoach.member_id).where(MemberCoach.coach_id == coach_id).order_by(
            MemberCoach.member_id)
        return list(self.session.exec(statement).all())
