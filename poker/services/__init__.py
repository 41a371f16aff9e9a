from .users import get_user, upsert_user
from .rooms import (
    add_membership,
    create_room,
    create_room_for_user,
    find_room_administered_by,
    find_room_with_admin,
    generate_unique_room_code,
    get_room,
    join_room,
    list_participants,
    room_exists,
    set_admin,
)
from .votes import (
    create_vote,
    get_active_vote,
    get_vote,
    list_vote_responses,
    reveal_vote,
    serialize_vote,
    upsert_vote_response,
)

__all__ = [
    # users
    "get_user",
    "upsert_user",
    # rooms
    "add_membership",
    "create_room",
    "create_room_for_user",
    "find_room_administered_by",
    "find_room_with_admin",
    "generate_unique_room_code",
    "get_room",
    "join_room",
    "list_participants",
    "room_exists",
    "set_admin",
    # votes
    "create_vote",
    "get_active_vote",
    "get_vote",
    "list_vote_responses",
    "reveal_vote",
    "serialize_vote",
    "upsert_vote_response",
]
