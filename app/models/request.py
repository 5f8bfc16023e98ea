"""
Request database model.

Connection requests and session requests share one table and one state
machine.  ``kind`` tells them apart; the session payload columns are only
populated for ``RequestKind.SESSION`` rows.

Sender/receiver display fields are copied from the profiles when the
request is created and are never re-synchronised afterwards.
"""

import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.schemas.session import SessionPayload


class Request(SQLModel, table=True):
    """A sender-to-receiver proposal carrying a status."""

    __tablename__ = "requests"
    __table_args__ = (
        Index("ix_requests_sender", "sender_role", "sender_id"),
        Index("ix_requests_receiver", "receiver_role", "receiver_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    kind: RequestKind = Field(nullable=False, index=True)

    # Parties (immutable after creation)
    sender_role: ActorRole = Field(nullable=False)
    sender_id: int = Field(nullable=False)
    receiver_role: ActorRole = Field(nullable=False)
    receiver_id: int = Field(nullable=False)

    # Denormalised display fields
    sender_first_name: Optional[str] = Field(default=None, max_length=30)
    sender_last_name: Optional[str] = Field(default=None, max_length=30)
    sender_profile_pic: Optional[str] = Field(default=None, max_length=500)
    receiver_first_name: Optional[str] = Field(default=None, max_length=30)
    receiver_last_name: Optional[str] = Field(default=None, max_length=30)
    receiver_profile_pic: Optional[str] = Field(default=None, max_length=500)

    status: RequestStatus = Field(default=RequestStatus.PENDING, nullable=False, index=True)
    message: Optional[str] = Field(default=None, max_length=500)

    # Session payload (kind == SESSION only)
    session_date_1: Optional[datetime.date] = Field(default=None)
    session_date_2: Optional[datetime.date] = Field(default=None)
    session_date_3: Optional[datetime.date] = Field(default=None)
    session_time_1: Optional[datetime.time] = Field(default=None)
    session_time_2: Optional[datetime.time] = Field(default=None)
    session_time_3: Optional[datetime.time] = Field(default=None)
    session_location: Optional[str] = Field(default=None, max_length=500)
    session_description: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    @property
    def session_payload(self) -> Optional[SessionPayload]:
        """Session details, or ``None`` for a connection request."""
        if self.kind != RequestKind.SESSION:
            return None
        return SessionPayload(
            candidate_dates=[self.session_date_1, self.session_date_2, self.session_date_3],
            candidate_times=[self.session_time_1, self.session_time_2, self.session_time_3],
            location=self.session_location,
            description=self.session_description,
        )

    def apply_session_payload(self, payload: SessionPayload) -> None:
        self.session_date_1, self.session_date_2, self.session_date_3 = payload.candidate_dates
        self.session_time_1, self.session_time_2, self.session_time_3 = payload.candidate_times
        self.session_location = payload.location
        self.session_description = payload.description
