"""End-to-end planning rounds through HTTP and the realtime dispatcher."""
import pytest


def _create_room(client):
    response = client.post(
        "/api/rooms",
        json={"userId": "u1", "roomName": "Sprint 1", "userName": "Alice", "userEmail": "alice@example.com"}
    )
    assert response.status_code == 200
    return response.json()["room"]["id"]


def _join_room(client, room_id, user_id, name):
    response = client.post(
        f"/api/rooms/{room_id}/join",
        json={"userId": user_id, "userName": name, "userEmail": f"{name.lower()}@example.com"}
    )
    assert response.status_code == 200


@pytest.mark.integration
class TestPlanningFlow:
    """Create room → join → connect → vote → reveal."""

    @pytest.mark.asyncio
    async def test_complete_round(self, client, dispatcher, gateway):
        room_id = _create_room(client)
        _join_room(client, room_id, "u2", "Bob")

        await dispatcher.dispatch("s1", "join-room", {"userId": "u1", "roomId": room_id})
        await dispatcher.dispatch("s2", "join-room", {"userId": "u2", "roomId": room_id})
        assert gateway.received("s1", "user-joined") == [{"id": "u2", "name": "Bob", "email": "bob@example.com"}]

        await dispatcher.dispatch("s1", "start-vote", {"roomId": room_id, "voteName": "Story 42", "adminId": "u1"})
        started = gateway.received("s2", "vote-started")[0]
        assert started["name"] == "Story 42"
        assert started["startedBy"] == "u1"

        await dispatcher.dispatch("s1", "submit-vote", {"voteId": started["id"], "userId": "u1", "value": "5"})
        await dispatcher.dispatch("s2", "submit-vote", {"voteId": started["id"], "userId": "u2", "value": "8"})
        assert gateway.received("s2", "vote-submitted") == [{"userId": "u1"}]
        assert gateway.received("s1", "vote-submitted") == [{"userId": "u2"}]

        state = client.get(f"/api/rooms/{room_id}").json()
        assert state["currentVote"]["id"] == started["id"]
        assert {r["user_id"] for r in state["voteResponses"]} == {"u1", "u2"}

        await dispatcher.dispatch("s1", "reveal-votes", {"voteId": started["id"], "adminId": "u1", "roomId": room_id})
        for sid in ("s1", "s2"):
            revealed = gateway.received(sid, "votes-revealed")[0]
            assert {r["user_name"]: r["value"] for r in revealed["responses"]} == {"Alice": "5", "Bob": "8"}

        state = client.get(f"/api/rooms/{room_id}").json()
        assert state["currentVote"]["revealed_at"] is not None

    @pytest.mark.asyncio
    async def test_admin_handover(self, client, dispatcher, gateway):
        room_id = _create_room(client)
        _join_room(client, room_id, "u2", "Bob")
        await dispatcher.dispatch("s1", "join-room", {"userId": "u1", "roomId": room_id})
        await dispatcher.dispatch("s2", "join-room", {"userId": "u2", "roomId": room_id})

        await dispatcher.dispatch("s1", "set-admin", {"roomId": room_id, "newAdminId": "u2", "requesterId": "u1"})

        assert gateway.received("s2", "admin-changed") == [{"newAdminId": "u2"}]
        assert client.get(f"/api/rooms/{room_id}").json()["room"]["admin_name"] == "Bob"

        # The creator lost the admin role for voting but may still hand it back
        await dispatcher.dispatch("s1", "start-vote", {"roomId": room_id, "voteName": "Mine", "adminId": "u1"})
        assert gateway.received("s1", "error") == ["Not authorized to start vote"]

        await dispatcher.dispatch("s2", "start-vote", {"roomId": room_id, "voteName": "Bob's", "adminId": "u2"})
        assert gateway.received("s1", "vote-started")[0]["startedBy"] == "u2"

        await dispatcher.dispatch("s1", "set-admin", {"roomId": room_id, "newAdminId": "u1", "requesterId": "u1"})
        assert client.get(f"/api/rooms/{room_id}").json()["room"]["admin_id"] == "u1"

    @pytest.mark.asyncio
    async def test_new_round_supersedes_previous(self, client, dispatcher, gateway):
        room_id = _create_room(client)
        await dispatcher.dispatch("s1", "join-room", {"userId": "u1", "roomId": room_id})

        await dispatcher.dispatch("s1", "start-vote", {"roomId": room_id, "voteName": "First", "adminId": "u1"})
        first_id = gateway.received("s1", "vote-started")[0]["id"]
        await dispatcher.dispatch("s1", "submit-vote", {"voteId": first_id, "userId": "u1", "value": "3"})

        await dispatcher.dispatch("s1", "start-vote", {"roomId": room_id, "voteName": "Second", "adminId": "u1"})

        state = client.get(f"/api/rooms/{room_id}").json()
        assert state["currentVote"]["name"] == "Second"
        assert state["voteResponses"] == []

    @pytest.mark.asyncio
    async def test_outsider_cannot_reveal(self, client, dispatcher, gateway):
        room_id = _create_room(client)
        _join_room(client, room_id, "u2", "Bob")
        await dispatcher.dispatch("s1", "join-room", {"userId": "u1", "roomId": room_id})
        await dispatcher.dispatch("s2", "join-room", {"userId": "u2", "roomId": room_id})
        await dispatcher.dispatch("s1", "start-vote", {"roomId": room_id, "voteName": "Story", "adminId": "u1"})
        vote_id = gateway.received("s1", "vote-started")[0]["id"]

        await dispatcher.dispatch("s2", "reveal-votes", {"voteId": vote_id, "adminId": "u2", "roomId": room_id})

        assert gateway.received("s2", "error") == ["Not authorized to reveal votes"]
        assert gateway.received("s1", "votes-revealed") == []
        assert client.get(f"/api/rooms/{room_id}").json()["currentVote"]["revealed_at"] is None
