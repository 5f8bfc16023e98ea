"""
Member repository.

Read-only profile lookup used to populate request display fields.
"""

from typing import Optional

from sqlmodel import Session

from app.models.member import Member


class MemberRepository:
    """Repository for Member database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def get_by_id(self, member_id: int) -> Optional[Member]:
        """
        Get member by ID.

        Args:
            member_id: Member ID

        Returns:
            Member instance if found, None otherwise
        """
        return self.session.get(Member, member_id)
