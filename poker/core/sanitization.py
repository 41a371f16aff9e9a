"""Input sanitization utilities."""
import re
from typing import Optional

from poker.core.constants import ESTIMATION_VALUES, ROOM_CODE_LENGTH
from poker.core.exceptions import ValidationError


# Maximum length constraints
MAX_ROOM_NAME_LENGTH = 100
MAX_DISPLAY_NAME_LENGTH = 100
MAX_VOTE_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 254
MAX_USER_ID_LENGTH = 100
MAX_ESTIMATE_LENGTH = 10

ROOM_CODE_PATTERN = re.compile(r'^\d{%d}$' % ROOM_CODE_LENGTH)


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize free text input.

    Strips HTML tags and normalizes whitespace. Does NOT escape HTML entities;
    clients render text as text.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValidationError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValidationError("Input must be a string")

    sanitized = text.strip()

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValidationError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Reject inputs that still contain HTML-like patterns after stripping
    if '<' in sanitized or '>' in sanitized:
        raise ValidationError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def _required_text(value: str, label: str, max_length: int) -> str:
    sanitized = sanitize_text(value, max_length=max_length)
    if not sanitized:
        raise ValidationError(f"{label} cannot be empty")
    return sanitized


def sanitize_room_name(room_name: str) -> str:
    """Sanitize a room name."""
    return _required_text(room_name, "Room name", MAX_ROOM_NAME_LENGTH)


def sanitize_display_name(name: str) -> str:
    """Sanitize a participant's display name."""
    return _required_text(name, "User name", MAX_DISPLAY_NAME_LENGTH)


def sanitize_vote_name(vote_name: str) -> str:
    """Sanitize the name of a voting round."""
    return _required_text(vote_name, "Vote name", MAX_VOTE_NAME_LENGTH)


def sanitize_email(email: str) -> str:
    """
    Light-touch email check.

    The address is only used as a contact field and is never verified here,
    so anything with a single ``@`` and no whitespace is accepted.
    """
    if not isinstance(email, str):
        raise ValidationError("Email must be a string")

    sanitized = email.strip()

    if not sanitized:
        raise ValidationError("Email cannot be empty")

    if len(sanitized) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"Email exceeds maximum length of {MAX_EMAIL_LENGTH} characters")

    if not re.match(r'^[^@\s]+@[^@\s]+$', sanitized):
        raise ValidationError("Email address is invalid")

    return sanitized


def validate_identifier(value: str, label: str = "User ID") -> str:
    """
    Validate an opaque identifier (user ids, vote ids).

    Identifiers are chosen by clients, so only length and printable-ness are
    enforced.
    """
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")

    value = value.strip()

    if not value:
        raise ValidationError(f"{label} cannot be empty")

    if len(value) > MAX_USER_ID_LENGTH:
        raise ValidationError(f"{label} exceeds maximum length of {MAX_USER_ID_LENGTH} characters")

    if not value.isprintable():
        raise ValidationError(f"{label} contains invalid characters")

    return value


def validate_room_code(room_code: str) -> str:
    """Validate that a room code is exactly three ASCII digits."""
    if not isinstance(room_code, str):
        raise ValidationError("Room code must be a string")

    room_code = room_code.strip()

    # str.isdigit() accepts non-ASCII digits, the regex does not
    if not ROOM_CODE_PATTERN.match(room_code) or not room_code.isascii():
        raise ValidationError(f"Room code must be exactly {ROOM_CODE_LENGTH} digits")

    return room_code


def validate_estimate(value: str, strict: bool = False) -> str:
    """
    Validate a submitted estimate.

    In non-strict mode any short string is accepted; the estimation domain is
    only a suggestion to clients.
    """
    if not isinstance(value, str):
        raise ValidationError("Vote value must be a string")

    value = value.strip()

    if not value:
        raise ValidationError("Vote value cannot be empty")

    if len(value) > MAX_ESTIMATE_LENGTH:
        raise ValidationError(f"Vote value exceeds maximum length of {MAX_ESTIMATE_LENGTH} characters")

    if strict and value not in ESTIMATION_VALUES:
        raise ValidationError(f"Vote value must be one of: {', '.join(ESTIMATION_VALUES)}")

    return value
