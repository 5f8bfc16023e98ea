"""
Request repository.

Handles database operations for :class:`Request`.

Transition writes go through :meth:`RequestRepository.transition_if_pending`,
a compare-and-set on ``status`` scoped by primary key and owner.  It does
**not** commit: the service commits once the whole unit of work (status
change plus any relationship insert) has succeeded.
"""

import datetime
from typing import Optional

from sqlalchemy import and_, or_, update
from sqlmodel import Session, select

from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.models.request import Request


class RequestRepository:
    """Repository for Request database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, request: Request) -> Request:
        self.session.add(request)
        self.session.commit()
        self.session.refresh(request)
        return request

    def get_by_id(self, request_id: int) -> Optional[Request]:
        return self.session.get(Request, request_id)

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def list_by_receiver(self, role: ActorRole, receiver_id: int, status: RequestStatus,
                         kind: Optional[RequestKind] = None, ) -> list[Request]:
        statement = select(Request).where(Request.receiver_role == role, Request.receiver_id == receiver_id,
                                          Request.status == status, )
        if kind is not None:
            statement = statement.where(Request.kind == kind)
        return list(self.session.exec(statement.order_by(Request.id)).all())

    def list_by_sender(self, role: ActorRole, sender_id: int, status: RequestStatus,
                       kind: Optional[RequestKind] = None, ) -> list[Request]:
        statement = select(Request).where(Request.sender_role == role, Request.sender_id == sender_id,
                                          Request.status == status, )
        if kind is not None:
            statement = statement.where(Request.kind == kind)
        return list(self.session.exec(statement.order_by(Request.id)).all())

    def exists_pending_between(self, kind: RequestKind, first_role: ActorRole, first_id: int,
                               second_role: ActorRole, second_id: int, ) -> bool:
        """Check for a pending request between two actors, in either direction.

        Read-only check: nothing in the schema prevents two concurrent
        callers from both seeing ``False`` and both inserting.
        """
        forward = and_(Request.sender_role == first_role, Request.sender_id == first_id,
                       Request.receiver_role == second_role, Request.receiver_id == second_id, )
        backward = and_(Request.sender_role == second_role, Request.sender_id == second_id,
                        Request.receiver_role == first_role, Request.receiver_id == first_id, )
        statement = select(Request.id).where(Request.kind == kind, Request.status == RequestStatus.PENDING,
                                             or_(forward, backward), ).limit(1)
        return self.session.exec(statement).first() is not None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def transition_if_pending(self, request_id: int, new_status: RequestStatus, *,
                              receiver_id: Optional[int] = None, sender_id: Optional[int] = None, ) -> int:
        """Atomically move a PENDING request to ``new_status``.

        Args:
            request_id: Request primary key.
            new_status: Target (terminal) status.
            receiver_id: If given, the row must belong to this receiver.
            sender_id: If given, the row must belong to this sender.

        Returns:
            Number of rows updated (0 or 1).  Zero means the request is
            missing, not owned by the caller, or no longer pending.
        """
        conditions = [Request.id == request_id, Request.status == RequestStatus.PENDING]
        if receiver_id is not None:
            conditions.append(Request.receiver_id == receiver_id)
        if sender_id is not None:
            conditions.append(Request.sender_id == sender_id)

        statement = (update(Request).where(*conditions).values(status=new_status,
                                                               updated_at=datetime.datetime.utcnow()).execution_options(
            synchronize_session=False))
        result = self.session.exec(statement)
        return result.rowcount
