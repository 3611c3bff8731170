"""Port interface for slow password hashing."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordHasherPort(Protocol):
    """Port for hashing and verifying account passwords.

    Implementations must use a deliberately slow, salted algorithm.
    """

    def hash_password(self, password: str) -> str:
        """Hash ``password`` for storage."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Return True when ``password`` matches ``password_hash``."""
        ...
