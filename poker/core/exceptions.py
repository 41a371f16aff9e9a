"""Domain errors raised by the services and the realtime core.

Every error subclasses ``ValueError`` so callers that only care about "the
request was bad" can keep catching that, while the HTTP layer and the command
dispatcher can map each kind to a status code or an ``error`` event.
"""


class PokerError(ValueError):
    """Base class for expected, non-fatal failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PokerError):
    """A required field is missing or malformed."""

    status_code = 400


class NotFoundError(PokerError):
    """Room, user or vote does not exist."""

    status_code = 404


class UnauthorizedError(PokerError):
    """Requester is not the room's admin (or creator, where allowed)."""

    status_code = 403


class ConflictError(PokerError):
    """State conflict, e.g. a room id already taken."""

    status_code = 409


class RoomCodeExhaustedError(PokerError):
    """No free room code could be found within the retry budget."""

    status_code = 503


def describe_validation_errors(errors) -> str:
    """
    Turn pydantic's error list into one short message for clients.

    Only the first problem is reported. A leading ``body`` location (added by
    FastAPI for request bodies) is dropped.
    """
    if not errors:
        return "Invalid request"

    error = errors[0]
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] == "body":
        loc = loc[1:]
    field = ".".join(loc) or "payload"

    if error.get("type") == "missing":
        return f"Missing required field: {field}"

    message = str(error.get("msg", "invalid value"))
    # Messages from our own ValueError subclasses arrive as "Value error, ..."
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    return f"Invalid field {field}: {message}"
