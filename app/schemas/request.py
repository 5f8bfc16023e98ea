"""
Request API schemas.

Payload shape (three candidate dates, three candidate times, non-empty
location and description) is enforced here; the role pair is validated by
:class:`app.services.request_service.RequestService`.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.schemas.actor import ActorRef
from app.schemas.session import SessionPayload


class ConnectionRequestCreate(BaseModel):
    """Schema for creating a connection request."""

    sender: ActorRef
    receiver: ActorRef
    message: Optional[str] = Field(None, max_length=500, description="Optional note to the receiver")


class SessionRequestCreate(BaseModel):
    """Schema for creating a session request."""

    sender: ActorRef
    receiver: ActorRef
    message: Optional[str] = Field(None, max_length=500)
    session: SessionPayload


class RequestResponse(BaseModel):
    """Schema for a request in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    kind: RequestKind
    status: RequestStatus

    sender_role: ActorRole
    sender_id: int
    sender_first_name: Optional[str]
    sender_last_name: Optional[str]
    sender_profile_pic: Optional[str]

    receiver_role: ActorRole
    receiver_id: int
    receiver_first_name: Optional[str]
    receiver_last_name: Optional[str]
    receiver_profile_pic: Optional[str]

    message: Optional[str]
    session: Optional[SessionPayload] = None

    created_at: datetime.datetime
    updated_at: datetime.datetime


class TransitionResponse(BaseModel):
    request_id: int
    status: RequestStatus
