"""
Member database model.

Members (athletes) are managed elsewhere; the request engine only reads
them to copy display fields into new requests.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Member(SQLModel, table=True):
    """Athlete profile."""

    __tablename__ = "members"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=30, nullable=False)
    last_name: str = Field(max_length=30, nullable=False)
    email: Optional[str] = Field(default=None, max_length=255, index=True)
    profile_pic: Optional[str] = Field(default=None, max_length=500)

    # Coordinate string, e.g. "Latitude: 42.02385, Longitude: -93.64541"
    location: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=datetime.utcnow)
