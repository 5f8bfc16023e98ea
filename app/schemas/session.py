"""Session request payload."""

import datetime

from pydantic import BaseModel, Field


class SessionPayload(BaseModel):
    """Proposed meeting details carried by a session request."""

    candidate_dates: list[datetime.date] = Field(..., min_length=3, max_length=3)
    candidate_times: list[datetime.time] = Field(..., min_length=3, max_length=3)
    location: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1, max_length=500)
