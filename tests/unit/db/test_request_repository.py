"""Tests for the request and member/coach repositories."""

import pytest

from app.db.repositories.member_coach import MemberCoachRepository
from app.db.repositories.request import RequestRepository
from app.models.enums import ActorRole, RequestKind, RequestStatus
from app.models.request import Request


@pytest.fixture
def repository(db) -> RequestRepository:
    return RequestRepository(db)


@pytest.fixture
def pending(repository) -> Request:
    """Member 1 -> coach 2, pending connection."""
    return repository.create(Request(kind=RequestKind.CONNECTION, sender_role=ActorRole.MEMBER, sender_id=1,
                                     receiver_role=ActorRole.COACH, receiver_id=2))


class TestTransitionIfPending:
    def test_updates_pending_row(self, repository, db, pending):
        assert repository.transition_if_pending(pending.id, RequestStatus.REJECTED, receiver_id=2) == 1
        db.commit()
        db.refresh(pending)
        assert pending.status == RequestStatus.REJECTED

    def test_second_transition_updates_nothing(self, repository, db, pending):
        assert repository.transition_if_pending(pending.id, RequestStatus.ACCEPTED) == 1
        db.commit()
        assert repository.transition_if_pending(pending.id, RequestStatus.CANCELLED) == 0

    def test_wrong_receiver(self, repository, pending):
        assert repository.transition_if_pending(pending.id, RequestStatus.ACCEPTED, receiver_id=1) == 0

    def test_wrong_sender(self, repository, pending):
        assert repository.transition_if_pending(pending.id, RequestStatus.CANCELLED, sender_id=2) == 0

    def test_unknown_id(self, repository):
        assert repository.transition_if_pending(404, RequestStatus.ACCEPTED) == 0

    def test_not_committed_by_repository(self, repository, db, pending):
        repository.transition_if_pending(pending.id, RequestStatus.ACCEPTED, receiver_id=2)
        db.rollback()
        db.refresh(pending)
        assert pending.status == RequestStatus.PENDING


class TestExistsPendingBetween:
    @pytest.mark.parametrize(
        "first, second",
        [
            ((ActorRole.MEMBER, 1), (ActorRole.COACH, 2)),
            ((ActorRole.COACH, 2), (ActorRole.MEMBER, 1)),
        ],
    )
    def test_either_direction(self, repository, pending, first, second):
        assert repository.exists_pending_between(RequestKind.CONNECTION, *first, *second)

    def test_kind_is_respected(self, repository, pending):
        assert not repository.exists_pending_between(RequestKind.SESSION, ActorRole.MEMBER, 1, ActorRole.COACH, 2)

    def test_role_is_respected(self, repository, pending):
        assert not repository.exists_pending_between(RequestKind.CONNECTION, ActorRole.COACH, 1, ActorRole.MEMBER, 2)

    def test_terminal_rows_ignored(self, repository, db, pending):
        repository.transition_if_pending(pending.id, RequestStatus.CANCELLED)
        db.commit()
        assert not repository.exists_pending_between(RequestKind.CONNECTION, ActorRole.MEMBER, 1, ActorRole.COACH, 2)


class TestListFilters:
    def test_by_receiver_and_sender(self, repository, pending):
        assert [r.id for r in repository.list_by_receiver(ActorRole.COACH, 2, RequestStatus.PENDING)] == [pending.id]
        assert [r.id for r in repository.list_by_sender(ActorRole.MEMBER, 1, RequestStatus.PENDING)] == [pending.id]
        assert repository.list_by_receiver(ActorRole.COACH, 2, RequestStatus.ACCEPTED) == []
        assert repository.list_by_sender(ActorRole.MEMBER, 1, RequestStatus.PENDING, RequestKind.SESSION) == []


class TestMemberCoachRepository:
    def test_add_if_absent_is_idempotent(self, db):
        links = MemberCoachRepository(db)
        assert links.add_if_absent(1, 2) is True
        assert links.add_if_absent(1, 2) is False
        db.commit()

        assert links.exists(1, 2)
        assert not links.exists(2, 1)
        assert links.list_coach_ids_for_member(1) == [2]

    def test_lists(self, db):
        links = MemberCoachRepository(db)
        for member_id, coach_id in [(1, 3), (1, 2), (4, 2)]:
            links.add_if_absent(member_id, coach_id)
        db.commit()

        assert links.list_coach_ids_for_member(1) == [2, 3]
        assert links.list_member_ids_for_coach(2) == [1, 4]
