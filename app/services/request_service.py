"""
Request service.

Lifecycle engine for connection and session requests.

State machine
-------------
Every request starts PENDING and moves exactly once to ACCEPTED,
REJECTED or CANCELLED.  Transitions are guarded by ownership (receiver for
accept/decline, sender for cancel) and by the current state, and are
written with a single conditional ``UPDATE ... WHERE status = 'PENDING'``
so that concurrent callers resolve to one winner.

Transition methods return ``False`` when nothing happened (unknown id,
wrong owner, already terminal, lost race).  They only raise for malformed
data or persistence failures, in which case nothing was committed.

Accepting a connection request links the member and the coach in the
same transaction as the status update.
"""

import datetime
from typing import Optional, Union

from sqlmodel import Session

from app.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from app.core.logging import get_logger
from app.db.repositories.coach import CoachRepository
from app.db.repositories.member import MemberRepository
from app.db.repositories.member_coach import MemberCoachRepository
from app.db.repositories.request import RequestRepository
from app.models.coach import Coach
from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.models.member import Member
from app.models.request import Request
from app.schemas.actor import ActorRef
from app.schemas.request import ConnectionRequestCreate, SessionRequestCreate

logger = get_logger(__name__)


class RequestService:
    """Service for request lifecycle business logic."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = RequestRepository(session)
        self.links = MemberCoachRepository(session)
        self.members = MemberRepository(session)
        self.coaches = CoachRepository(session)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_connection_request(self, data: ConnectionRequestCreate) -> Request:
        """
        Create a PENDING connection request.

        Args:
            data: Sender, receiver and optional message

        Returns:
            Created request

        Raises:
            InvalidRequestError: If the pair is not one member and one coach
            NotFoundError: If either profile does not exist
            ConflictError: If a pending request exists between the two
                actors (either direction) or they are already linked
        """
        member_id, coach_id = self._member_coach_pair(data.sender, data.receiver)
        sender_profile = self._get_profile(data.sender)
        receiver_profile = self._get_profile(data.receiver)

        # Best-effort: no unique index backs this check, two concurrent
        # creations may both pass it.
        if self.repository.exists_pending_between(RequestKind.CONNECTION, data.sender.role, data.sender.id,
                                                  data.receiver.role, data.receiver.id, ):
            raise ConflictError("A pending connection request already exists between these users")

        if self.links.exists(member_id, coach_id):
            raise ConflictError("These users are already connected")

        request = self._new_request(RequestKind.CONNECTION, data.sender, data.receiver, data.message,
                                    sender_profile, receiver_profile)
        request = self.repository.create(request)
        logger.info("Connection request %s created: %s -> %s", request.id, data.sender, data.receiver)
        return request

    def create_session_request(self, data: SessionRequestCreate) -> Request:
        """
        Create a PENDING session request.

        Session requests skip the duplicate and already-linked checks:
        several pending proposals between the same pair are legal.

        Raises:
            InvalidRequestError: If the pair is not one member and one coach
            NotFoundError: If either profile does not exist
        """
        self._member_coach_pair(data.sender, data.receiver)
        sender_profile = self._get_profile(data.sender)
        receiver_profile = self._get_profile(data.receiver)

        request = self._new_request(RequestKind.SESSION, data.sender, data.receiver, data.message, sender_profile,
                                    receiver_profile)
        request.apply_session_payload(data.session)
        request = self.repository.create(request)
        logger.info("Session request %s created: %s -> %s", request.id, data.sender, data.receiver)
        return request

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def accept(self, request_id: int, acting_receiver_id: int) -> bool:
        """
        Accept a pending request addressed to ``acting_receiver_id``.

        For connection requests the member/coach link is created (if
        absent) in the same transaction as the status change.

        Returns:
            True if this call moved the request to ACCEPTED, False otherwise

        Raises:
            InvalidRequestError: If a connection request joins two actors
                of the same role (nothing is committed)
        """
        request = self.repository.get_by_id(request_id)
        if not self._is_pending_for(request, receiver_id=acting_receiver_id):
            return False

        kind = request.kind
        sender_role, sender_id = request.sender_role, request.sender_id
        receiver_role, receiver_id = request.receiver_role, request.receiver_id

        try:
            updated = self.repository.transition_if_pending(request_id, RequestStatus.ACCEPTED,
                                                            receiver_id=acting_receiver_id)
            if updated == 0:
                self.session.rollback()
                logger.info("Request %s: accept lost a race, status already changed", request_id)
                return False

            if kind == RequestKind.CONNECTION:
                member_id, coach_id = self._member_coach_pair(ActorRef(role=sender_role, id=sender_id),
                                                              ActorRef(role=receiver_role, id=receiver_id))
                if self.links.add_if_absent(member_id, coach_id):
                    logger.info("Linked member %s with coach %s", member_id, coach_id)

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Request %s accepted by %s", request_id, acting_receiver_id)
        return True

    def decline(self, request_id: int, acting_receiver_id: int) -> bool:
        """Move a pending request addressed to ``acting_receiver_id`` to REJECTED."""
        request = self.repository.get_by_id(request_id)
        if not self._is_pending_for(request, receiver_id=acting_receiver_id):
            return False
        return self._transition(request_id, RequestStatus.REJECTED, receiver_id=acting_receiver_id)

    def cancel(self, request_id: int, acting_sender_id: int) -> bool:
        """Move a pending request sent by ``acting_sender_id`` to CANCELLED."""
        request = self.repository.get_by_id(request_id)
        if not self._is_pending_for(request, sender_id=acting_sender_id):
            return False
        return self._transition(request_id, RequestStatus.CANCELLED, sender_id=acting_sender_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_request(self, request_id: int) -> Request:
        request = self.repository.get_by_id(request_id)
        if request is None:
            raise NotFoundError(f"Request {request_id} not found")
        return request

    def list_pending_for_receiver(self, actor: ActorRef, kind: Optional[RequestKind] = None) -> list[Request]:
        return self.repository.list_by_receiver(actor.role, actor.id, RequestStatus.PENDING, kind)

    def list_pending_sent_by(self, actor: ActorRef, kind: Optional[RequestKind] = None) -> list[Request]:
        return self.repository.list_by_sender(actor.role, actor.id, RequestStatus.PENDING, kind)

    def list_connections(self, actor: ActorRef) -> list[int]:
        """Ids of the actors linked to ``actor``: coaches for a member, members for a coach."""
        if actor.role == ActorRole.MEMBER:
            return self.links.list_coach_ids_for_member(actor.id)
        return self.links.list_member_ids_for_coach(actor.id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _transition(self, request_id: int, new_status: RequestStatus, *, receiver_id: Optional[int] = None,
                    sender_id: Optional[int] = None, ) -> bool:
        try:
            updated = self.repository.transition_if_pending(request_id, new_status, receiver_id=receiver_id,
                                                            sender_id=sender_id)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        if updated == 0:
            logger.info("Request %s: %s lost a race, status already changed", request_id, new_status.value)
            return False

        logger.info("Request %s moved to %s", request_id, new_status.value)
        return True

    @staticmethod
    def _is_pending_for(request: Optional[Request], *, receiver_id: Optional[int] = None,
                        sender_id: Optional[int] = None, ) -> bool:
        if request is None or request.status.is_terminal:
            return False
        if receiver_id is not None and request.receiver_id != receiver_id:
            return False
        if sender_id is not None and request.sender_id != sender_id:
            return False
        return True

    @staticmethod
    def _member_coach_pair(first: ActorRef, second: ActorRef) -> tuple[int, int]:
        """Return ``(member_id, coach_id)`` for a cross-role pair."""
        if first.role == ActorRole.MEMBER and second.role == ActorRole.COACH:
            return first.id, second.id
        if first.role == ActorRole.COACH and second.role == ActorRole.MEMBER:
            return second.id, first.id
        raise InvalidRequestError("Invalid request: both parties must be different types (MEMBER and COACH)")

    def _get_profile(self, actor: ActorRef) -> Union[Member, Coach]:
        if actor.role == ActorRole.MEMBER:
            profile = self.members.get_by_id(actor.id)
        else:
            profile = self.coaches.get_by_id(actor.id)
        if profile is None:
            raise NotFoundError(f"{actor.role.value.capitalize()} {actor.id} not found")
        return profile

    @staticmethod
    def _new_request(kind: RequestKind, sender: ActorRef, receiver: ActorRef, message: Optional[str],
                     sender_profile: Union[Member, Coach], receiver_profile: Union[Member, Coach], ) -> Request:
        now = datetime.datetime.utcnow()
        return Request(kind=kind, sender_role=sender.role, sender_id=sender.id, receiver_role=receiver.role,
                       receiver_id=receiver.id, sender_first_name=sender_profile.first_name,
                       sender_last_name=sender_profile.last_name, sender_profile_pic=sender_profile.profile_pic,
                       receiver_first_name=receiver_profile.first_name,
                       receiver_last_name=receiver_profile.last_name,
                       receiver_profile_pic=receiver_profile.profile_pic, message=message,
                       status=RequestStatus.PENDING, created_at=now, updated_at=now, )
