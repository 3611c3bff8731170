"""Administrator account created by first-run initialization."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NewUser:
    """A user row to be inserted.

    Attributes:
        username: Unique login name.
        password_hash: Slow hash of the password (never the plaintext).
        admin: Whether the user has the administrator role.
        avatar: Avatar path, empty when unset.
    """

    username: str
    password_hash: str
    admin: bool = False
    avatar: str = ""
