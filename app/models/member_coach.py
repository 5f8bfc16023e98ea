"""
Member/coach relationship model.

The composite primary key makes each pair unique.  Rows are only ever
created as a side effect of accepting a connection request.
"""

from datetime import datetime

from sqlmodel import Field, SQLModel


class MemberCoach(SQLModel, table=True):
    __tablename__ = "member_coach"

    member_id: int = Field(foreign_key="members.id", primary_key=True)
    coach_id: int = Field(foreign_key="coaches.id", primary_key=True, index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
