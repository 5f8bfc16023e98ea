"""
Domain errors raised by the service layer.

A transition that is not allowed (wrong owner, request no longer pending,
lost race) is *not* an error: the transition methods return ``False``.
The exceptions below are mapped to HTTP status codes in ``app.main``.
"""


class CoachMatchError(Exception):
    """Base class for all domain errors."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(CoachMatchError):
    """A referenced request or profile does not exist."""


class ConflictError(CoachMatchError):
    """Duplicate pending connection request, or the pair is already linked."""


class InvalidRequestError(CoachMatchError):
    """Malformed request: sender and receiver must be one member and one coach."""
