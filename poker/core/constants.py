"""Application constants.

Magic strings and numbers shared between the HTTP layer, the realtime layer
and the services.
"""

# Estimation domain shown to clients. Advisory unless STRICT_ESTIMATES is on.
ESTIMATION_VALUES = ("0", "1", "2", "3", "5", "8", "13", "21", "34", "55", "∞", "?")

# Room codes are 3-digit numbers (100-999)
ROOM_CODE_LENGTH = 3
ROOM_CODE_MIN = 100
ROOM_CODE_MAX = 999

# Inbound realtime commands
CMD_JOIN_ROOM = "join-room"
CMD_SET_ADMIN = "set-admin"
CMD_START_VOTE = "start-vote"
CMD_SUBMIT_VOTE = "submit-vote"
CMD_REVEAL_VOTES = "reveal-votes"

# Outbound realtime events
EVT_ROOM_JOINED = "room-joined"
EVT_USER_JOINED = "user-joined"
EVT_USER_LEFT = "user-left"
EVT_ADMIN_CHANGED = "admin-changed"
EVT_VOTE_STARTED = "vote-started"
EVT_VOTE_SUBMITTED = "vote-submitted"
EVT_VOTES_REVEALED = "votes-revealed"
EVT_ERROR = "error"
