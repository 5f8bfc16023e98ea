"""
Coach database model.

Like members, coaches are read-only for this service.  A coach's skills
live in the ``coach_skills`` association table (see
:mod:`app.models.skill`).
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Coach(SQLModel, table=True):
    """Coach profile."""

    __tablename__ = "coaches"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=30, nullable=False)
    last_name: str = Field(max_length=30, nullable=False)
    email: Optional[str] = Field(default=None, max_length=255, index=True)
    profile_pic: Optional[str] = Field(default=None, max_length=500)
    biography: Optional[str] = Field(default=None, max_length=1000)

    # Coordinate string; NULL means "location unknown"
    location: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=datetime.utcnow)
