"""Unit tests for vote service."""
import pytest
from unittest.mock import patch
from sqlalchemy.exc import IntegrityError, OperationalError

from poker.db.models import Vote, VoteResponse
from poker.services.votes import (
    create_vote,
    get_active_vote,
    get_vote,
    list_vote_responses,
    reveal_vote,
    serialize_vote,
    upsert_vote_response,
)
from poker.services.rooms import create_room
from poker.services.users import upsert_user


@pytest.mark.unit
class TestCreateVote:
    """Starting votes keeps at most one active vote per room."""

    def test_new_vote_is_active_and_unrevealed(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")

        assert vote.is_active is True
        assert vote.revealed_at is None
        assert vote.room_id == room.id
        assert vote.started_by == "u1"
        assert len(vote.id) == 36

    def test_starting_again_deactivates_previous(self, db_session, room):
        first = create_vote(db_session, room.id, "Story 1", "u1")
        second = create_vote(db_session, room.id, "Story 2", "u1")

        db_session.refresh(first)
        assert first.is_active is False
        assert second.is_active is True

    def test_at_most_one_active_vote_after_many_starts(self, db_session, room):
        for i in range(10):
            create_vote(db_session, room.id, f"Story {i}", "u1")

        active = db_session.query(Vote).filter(
            Vote.room_id == room.id,
            Vote.is_active.is_(True)
        ).count()
        assert active == 1
        assert get_active_vote(db_session, room.id).name == "Story 9"

    def test_other_rooms_are_untouched(self, db_session, room, alice):
        from poker.services.rooms import create_room

        other = create_room(db_session, "456", "Other", alice.id)
        other_vote = create_vote(db_session, other.id, "Theirs", "u1")
        create_vote(db_session, room.id, "Ours", "u1")

        db_session.refresh(other_vote)
        assert other_vote.is_active is True

    def test_failed_insert_rolls_back_deactivation(self, db_session, room):
        first = create_vote(db_session, room.id, "Story 1", "u1")

        with patch.object(db_session, "commit", side_effect=OperationalError("stmt", {}, Exception("disk I/O error"))):
            with pytest.raises(OperationalError):
                create_vote(db_session, room.id, "Story 2", "u1")

        assert get_active_vote(db_session, room.id).id == first.id


@pytest.mark.unit
class TestActiveVote:

    def test_no_vote_returns_none(self, db_session, room):
        assert get_active_vote(db_session, room.id) is None

    def test_serialize_vote_includes_starter_name(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")

        data = serialize_vote(vote)

        assert data["name"] == "Story 42"
        assert data["started_by_name"] == "Alice"
        assert data["revealed_at"] is None
        assert data["is_active"] is True


@pytest.mark.unit
class TestVoteResponses:
    """Responses are upserted per (vote, user)."""

    def test_resubmission_keeps_latest_value(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")

        upsert_vote_response(db_session, vote.id, "u2", "3")
        upsert_vote_response(db_session, vote.id, "u2", "8")

        rows = db_session.query(VoteResponse).filter(VoteResponse.vote_id == vote.id).all()
        assert len(rows) == 1
        assert rows[0].value == "8"

    def test_unknown_user_is_not_stored(self, fk_db_session):
        upsert_user(fk_db_session, "u1", "alice@example.com", "Alice")
        create_room(fk_db_session, "123", "Sprint 1", "u1")
        vote = create_vote(fk_db_session, "123", "Story 42", "u1")

        with pytest.raises(IntegrityError):
            upsert_vote_response(fk_db_session, vote.id, "ghost", "5")

        assert fk_db_session.query(VoteResponse).count() == 0
        # The session is usable again after the failed write
        upsert_vote_response(fk_db_session, vote.id, "u1", "3")
        assert fk_db_session.query(VoteResponse).one().value == "3"

    def test_list_includes_user_names(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")
        upsert_vote_response(db_session, vote.id, "u1", "5")
        upsert_vote_response(db_session, vote.id, "u2", "13")

        responses = list_vote_responses(db_session, vote.id)

        by_user = {r["user_id"]: r for r in responses}
        assert by_user["u1"]["user_name"] == "Alice"
        assert by_user["u1"]["value"] == "5"
        assert by_user["u2"]["user_name"] == "Bob"
        assert by_user["u2"]["value"] == "13"
        assert set(by_user["u2"]) == {"vote_id", "user_id", "value", "submitted_at", "user_name"}

    def test_hidden_values_are_blanked(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")
        upsert_vote_response(db_session, vote.id, "u2", "13")

        responses = list_vote_responses(db_session, vote.id, hide_values=True)

        assert responses[0]["value"] is None
        assert responses[0]["user_id"] == "u2"


@pytest.mark.unit
class TestRevealVote:

    def test_reveal_sets_timestamp(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")

        reveal_vote(db_session, vote.id)

        assert get_vote(db_session, vote.id).revealed_at is not None

    def test_reveal_twice_is_harmless(self, db_session, room):
        vote = create_vote(db_session, room.id, "Story 42", "u1")

        reveal_vote(db_session, vote.id)
        first = get_vote(db_session, vote.id).revealed_at
        reveal_vote(db_session, vote.id)
        second = get_vote(db_session, vote.id).revealed_at

        assert second is not None
        assert second >= first

    def test_reveal_unknown_vote_is_noop(self, db_session, room):
        reveal_vote(db_session, "no-such-vote")

        assert db_session.query(Vote).count() == 0
