"""Input validation rules shared by the admin and initialization services.

Each validator returns None on success and raises
:class:`~perfectpic.foundation.domain.exceptions.ValidationError` naming
the offending field otherwise.
"""

from __future__ import annotations

import re
import string

from perfectpic.foundation.domain.exceptions import ValidationError

RESERVED_USERNAMES: frozenset[str] = frozenset(
    {"admin", "root", "system", "audit", "security", "support"}
)

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")
_PASSWORD_ALPHABET = frozenset(string.ascii_letters + string.digits + string.punctuation)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# bcrypt only hashes the first 72 bytes; longer inputs are rejected.
MAX_PASSWORD_LENGTH = 72


def validate_username(username: str, *, allow_reserved: bool = False) -> None:
    """Validate a username.

    Rules: 4-20 characters of ``[A-Za-z0-9_]``, not purely numeric, and
    not a reserved name unless ``allow_reserved`` is set (first-run
    initialization may create ``admin``).

    Raises:
        ValidationError: If any rule is violated.
    """
    if not 4 <= len(username) <= 20:
        raise ValidationError("username", "Username must be between 4 and 20 characters")
    if not _USERNAME_PATTERN.fullmatch(username):
        raise ValidationError(
            "username", "Username may only contain letters, digits and underscores"
        )
    if not allow_reserved and username.lower() in RESERVED_USERNAMES:
        raise ValidationError("username", "Username is reserved")
    if username.isdigit():
        raise ValidationError("username", "Username must not be purely numeric")


def validate_password(password: str) -> None:
    """Validate password strength.

    Rules: 8 to 72 characters, printable ASCII letters, digits and
    punctuation only, with at least one letter and one digit.

    Raises:
        ValidationError: If any rule is violated.
    """
    if len(password) < 8:
        raise ValidationError("password", "Password must be at least 8 characters")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError(
            "password", f"Password must be at most {MAX_PASSWORD_LENGTH} characters"
        )
    if any(ch not in _PASSWORD_ALPHABET for ch in password):
        raise ValidationError(
            "password", "Password may only contain letters, digits and symbols"
        )
    has_letter = any(ch in string.ascii_letters for ch in password)
    has_digit = any(ch in string.digits for ch in password)
    if not (has_letter and has_digit):
        raise ValidationError(
            "password", "Password must contain at least one letter and one digit"
        )


def validate_email(email: str) -> None:
    """Validate an email address against a simple pattern.

    Raises:
        ValidationError: If the address does not look like an email.
    """
    if not _EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("email", "Invalid email address")


def validate_not_blank(field: str, value: str) -> None:
    """Reject values that are empty after trimming whitespace."""
    if not value.strip():
        raise ValidationError(field, "Must not be empty")


def parse_int64(raw: str) -> int | None:
    """Parse a base-10 signed 64-bit integer, or return None.

    Surrounding whitespace and a leading sign are accepted. Values outside
    the signed 64-bit range are rejected.
    """
    text = raw.strip()
    if not text:
        return None
    body = text[1:] if text[0] in "+-" else text
    if not body.isascii() or not body.isdigit():
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value
