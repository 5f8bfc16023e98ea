"""
Tests for the request lifecycle engine.

Runs against a per-test SQLite database (see ``tests/conftest.py``).
"""

import datetime

import pytest
from pydantic import ValidationError
from sqlmodel import Session, select

from app.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from app.db.repositories.member_coach import MemberCoachRepository
from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.models.member import Member
from app.models.member_coach import MemberCoach
from app.models.request import Request
from app.schemas.actor import ActorRef
from app.schemas.request import ConnectionRequestCreate, SessionRequestCreate
from app.schemas.session import SessionPayload
from app.services.request_service import RequestService


# ======================================================================
# Helpers
# ======================================================================


def _member_ref(member) -> ActorRef:
    return ActorRef(role=ActorRole.MEMBER, id=member.id)


def _coach_ref(coach) -> ActorRef:
    return ActorRef(role=ActorRole.COACH, id=coach.id)


def _session_payload() -> SessionPayload:
    return SessionPayload(
        candidate_dates=[datetime.date(2026, 11, d) for d in (2, 3, 4)],
        candidate_times=[datetime.time(h, 30) for h in (9, 12, 17)],
        location="Lied Recreation Center",
        description="Sprint mechanics",
    )


@pytest.fixture
def service(db) -> RequestService:
    return RequestService(db)


@pytest.fixture
def connection(service, member, coach) -> Request:
    """A pending member -> coach connection request."""
    return service.create_connection_request(
        ConnectionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach), message="Hi coach"))


def _status(engine, request_id: int) -> RequestStatus:
    with Session(engine) as fresh:
        return fresh.get(Request, request_id).status


def _link_count(engine) -> int:
    with Session(engine) as fresh:
        return len(fresh.exec(select(MemberCoach)).all())


# ======================================================================
# Connection request creation
# ======================================================================


class TestCreateConnectionRequest:
    def test_created_pending_with_display_fields(self, connection, member, coach):
        assert connection.id is not None
        assert connection.kind == RequestKind.CONNECTION
        assert connection.status == RequestStatus.PENDING
        assert connection.sender_first_name == "Alex"
        assert connection.receiver_last_name == "Coach"
        assert connection.receiver_profile_pic == coach.profile_pic
        assert connection.message == "Hi coach"
        assert connection.created_at == connection.updated_at
        assert connection.session_payload is None

    def test_coach_to_member_allowed(self, service, member, coach):
        request = service.create_connection_request(
            ConnectionRequestCreate(sender=_coach_ref(coach), receiver=_member_ref(member)))
        assert request.sender_role == ActorRole.COACH
        assert request.receiver_role == ActorRole.MEMBER

    def test_duplicate_same_direction_conflicts(self, service, connection, member, coach):
        with pytest.raises(ConflictError):
            service.create_connection_request(
                ConnectionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach)))

    def test_duplicate_reverse_direction_conflicts(self, service, connection, member, coach):
        with pytest.raises(ConflictError):
            service.create_connection_request(
                ConnectionRequestCreate(sender=_coach_ref(coach), receiver=_member_ref(member)))

    def test_already_linked_conflicts(self, service, db, member, coach):
        db.add(MemberCoach(member_id=member.id, coach_id=coach.id))
        db.commit()
        with pytest.raises(ConflictError, match="already connected"):
            service.create_connection_request(
                ConnectionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach)))

    def test_new_request_allowed_after_decline(self, service, connection, member, coach):
        assert service.decline(connection.id, coach.id) is True
        again = service.create_connection_request(
            ConnectionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach)))
        assert again.id != connection.id

    def test_same_role_pair_rejected(self, service, db, member):
        other = Member(first_name="Jo", last_name="Swimmer")
        db.add(other)
        db.commit()
        with pytest.raises(InvalidRequestError):
            service.create_connection_request(
                ConnectionRequestCreate(sender=_member_ref(member), receiver=_member_ref(other)))

    def test_unknown_receiver(self, service, member):
        with pytest.raises(NotFoundError):
            service.create_connection_request(
                ConnectionRequestCreate(sender=_member_ref(member), receiver=ActorRef(role=ActorRole.COACH, id=999)))


# ======================================================================
# Session request creation
# ======================================================================


class TestCreateSessionRequest:
    def test_created_with_payload(self, service, member, coach):
        request = service.create_session_request(
            SessionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach), session=_session_payload()))

        assert request.kind == RequestKind.SESSION
        assert request.status == RequestStatus.PENDING
        payload = request.session_payload
        assert payload.candidate_dates[2] == datetime.date(2026, 11, 4)
        assert payload.candidate_times[0] == datetime.time(9, 30)
        assert payload.location == "Lied Recreation Center"

    def test_multiple_pending_between_same_pair_allowed(self, service, member, coach):
        data = SessionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach), session=_session_payload())
        first = service.create_session_request(data)
        second = service.create_session_request(data)
        assert first.id != second.id

    def test_allowed_between_linked_actors(self, service, db, member, coach):
        db.add(MemberCoach(member_id=member.id, coach_id=coach.id))
        db.commit()
        request = service.create_session_request(
            SessionRequestCreate(sender=_coach_ref(coach), receiver=_member_ref(member), session=_session_payload()))
        assert request.status == RequestStatus.PENDING

    def test_does_not_conflict_with_pending_connection(self, service, connection, member, coach):
        request = service.create_session_request(
            SessionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach), session=_session_payload()))
        assert request.kind == RequestKind.SESSION

    def test_same_role_pair_rejected(self, service, coach):
        with pytest.raises(InvalidRequestError):
            service.create_session_request(
                SessionRequestCreate(sender=_coach_ref(coach), receiver=_coach_ref(coach), session=_session_payload()))

    def test_payload_needs_three_candidates(self):
        with pytest.raises(ValidationError):
            SessionPayload(candidate_dates=[datetime.date(2026, 11, 2)] * 2,
                           candidate_times=[datetime.time(9, 0)] * 3, location="Gym", description="Drills")

    def test_payload_needs_location(self):
        with pytest.raises(ValidationError):
            SessionPayload(candidate_dates=[datetime.date(2026, 11, 2)] * 3,
                           candidate_times=[datetime.time(9, 0)] * 3, location="", description="Drills")


# ======================================================================
# Accept
# ======================================================================


class TestAccept:
    def test_accept_creates_relationship(self, service, engine, connection, member, coach):
        assert service.accept(connection.id, coach.id) is True

        assert _status(engine, connection.id) == RequestStatus.ACCEPTED
        with Session(engine) as fresh:
            assert MemberCoachRepository(fresh).exists(member.id, coach.id)

    def test_accept_coach_sent_request_derives_pair(self, service, engine, member, coach):
        request = service.create_connection_request(
            ConnectionRequestCreate(sender=_coach_ref(coach), receiver=_member_ref(member)))
        assert service.accept(request.id, member.id) is True
        with Session(engine) as fresh:
            assert MemberCoachRepository(fresh).list_coach_ids_for_member(member.id) == [coach.id]

    def test_accept_twice_creates_one_relationship(self, service, engine, connection, coach):
        assert service.accept(connection.id, coach.id) is True
        assert service.accept(connection.id, coach.id) is False
        assert _link_count(engine) == 1

    def test_accept_by_non_receiver(self, service, engine, connection, member):
        assert service.accept(connection.id, member.id) is False
        assert _status(engine, connection.id) == RequestStatus.PENDING
        assert _link_count(engine) == 0

    def test_accept_unknown_request(self, service):
        assert service.accept(12345, 1) is False

    def test_accept_session_request_creates_no_relationship(self, service, engine, member, coach):
        request = service.create_session_request(
            SessionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach), session=_session_payload()))
        assert service.accept(request.id, coach.id) is True
        assert _status(engine, request.id) == RequestStatus.ACCEPTED
        assert _link_count(engine) == 0

    def test_accept_when_link_already_exists_is_noop_for_link(self, service, db, engine, connection, member, coach):
        db.add(MemberCoach(member_id=member.id, coach_id=coach.id))
        db.commit()
        assert service.accept(connection.id, coach.id) is True
        assert _link_count(engine) == 1

    def test_same_role_connection_rolls_back(self, service, db, engine, member):
        # Cannot be created through the service; simulate legacy data.
        bad = Request(kind=RequestKind.CONNECTION, sender_role=ActorRole.MEMBER, sender_id=member.id,
                      receiver_role=ActorRole.MEMBER, receiver_id=member.id + 1)
        db.add(bad)
        db.commit()
        db.refresh(bad)

        with pytest.raises(InvalidRequestError):
            service.accept(bad.id, member.id + 1)

        assert _status(engine, bad.id) == RequestStatus.PENDING
        assert _link_count(engine) == 0

    def test_lost_race_reports_false(self, engine, connection, coach):
        """Both callers see PENDING; only the first conditional update wins."""
        with Session(engine) as session_a, Session(engine) as session_b:
            loser = RequestService(session_a)
            winner = RequestService(session_b)

            stale = loser.repository.get_by_id(connection.id)
            assert stale.status == RequestStatus.PENDING

            assert winner.accept(connection.id, coach.id) is True

            # The loser already holds its PENDING snapshot.
            loser.repository.get_by_id = lambda _id: stale
            assert loser.accept(connection.id, coach.id) is False

        assert _status(engine, connection.id) == RequestStatus.ACCEPTED
        assert _link_count(engine) == 1

    def test_accept_bumps_updated_at(self, service, engine, connection, coach):
        created = connection.created_at
        assert service.accept(connection.id, coach.id) is True
        with Session(engine) as fresh:
            stored = fresh.get(Request, connection.id)
            assert stored.updated_at >= created
            assert stored.created_at == created


# ======================================================================
# Decline / cancel
# ======================================================================


class TestDeclineAndCancel:
    def test_decline(self, service, engine, connection, coach):
        assert service.decline(connection.id, coach.id) is True
        assert _status(engine, connection.id) == RequestStatus.REJECTED
        assert _link_count(engine) == 0

    def test_decline_by_sender_not_allowed(self, service, engine, connection, member):
        assert service.decline(connection.id, member.id) is False
        assert _status(engine, connection.id) == RequestStatus.PENDING

    def test_cancel_by_sender(self, service, engine, connection, member):
        assert service.cancel(connection.id, member.id) is True
        assert _status(engine, connection.id) == RequestStatus.CANCELLED

    def test_cancel_by_receiver_not_allowed(self, service, engine, connection, coach):
        assert service.cancel(connection.id, coach.id) is False
        assert _status(engine, connection.id) == RequestStatus.PENDING

    @pytest.mark.parametrize("first", ["accept", "decline", "cancel"])
    def test_terminal_states_are_final(self, service, engine, connection, member, coach, first):
        actors = {"accept": coach.id, "decline": coach.id, "cancel": member.id}
        assert getattr(service, first)(connection.id, actors[first]) is True
        final = _status(engine, connection.id)

        assert service.accept(connection.id, coach.id) is False
        assert service.decline(connection.id, coach.id) is False
        assert service.cancel(connection.id, member.id) is False
        assert _status(engine, connection.id) == final
        assert final.is_terminal

    @pytest.mark.parametrize(
        "status, terminal",
        [
            (RequestStatus.PENDING, False),
            (RequestStatus.ACCEPTED, True),
            (RequestStatus.REJECTED, True),
            (RequestStatus.CANCELLED, True),
        ],
    )
    def test_only_pending_is_open(self, status, terminal):
        assert status.is_terminal is terminal


# ======================================================================
# Queries
# ======================================================================


class TestQueries:
    def test_pending_for_receiver(self, service, connection, member, coach):
        session_request = service.create_session_request(
            SessionRequestCreate(sender=_member_ref(member), receiver=_coach_ref(coach), session=_session_payload()))

        pending = service.list_pending_for_receiver(_coach_ref(coach))
        assert [r.id for r in pending] == [connection.id, session_request.id]

        only_sessions = service.list_pending_for_receiver(_coach_ref(coach), RequestKind.SESSION)
        assert [r.id for r in only_sessions] == [session_request.id]

    def test_pending_sent_by(self, service, connection, member, coach):
        assert [r.id for r in service.list_pending_sent_by(_member_ref(member))] == [connection.id]
        assert service.list_pending_sent_by(_coach_ref(coach)) == []

    def test_role_is_part_of_the_filter(self, service, connection, coach):
        """A member with the coach's id sees nothing addressed to the coach."""
        assert service.list_pending_for_receiver(ActorRef(role=ActorRole.MEMBER, id=coach.id)) == []

    def test_transitioned_requests_drop_out(self, service, connection, coach):
        service.accept(connection.id, coach.id)
        assert service.list_pending_for_receiver(_coach_ref(coach)) == []

    def test_connections_after_accept(self, service, connection, member, coach):
        assert service.list_connections(_member_ref(member)) == []
        service.accept(connection.id, coach.id)

        assert service.list_connections(_member_ref(member)) == [coach.id]
        assert service.list_connections(_coach_ref(coach)) == [member.id]

    def test_get_request_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.get_request(999)
