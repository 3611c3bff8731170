"""Bcrypt password hashing.

Implements :class:`~perfectpic.foundation.domain.ports.PasswordHasherPort`.
The plaintext password exists only for the duration of the call; it is
never logged or stored.
"""

from __future__ import annotations

import bcrypt

DEFAULT_BCRYPT_ROUNDS = 12


class BcryptPasswordHasher:
    """Salted bcrypt hashing with a configurable cost factor.

    Args:
        rounds: bcrypt log2 work factor (4-31). Lower it only in tests.

    Example:
        >>> hasher = BcryptPasswordHasher(rounds=4)
        >>> password_hash = hasher.hash_password("pw12345!")
        >>> password_hash.startswith("$2b$")
        True
        >>> hasher.verify_password("pw12345!", password_hash)
        True
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash_password(self, password: str) -> str:
        """Hash ``password`` with a fresh salt.

        Returns:
            Bcrypt hash string (includes salt, starts with ``$2b$``).
        """
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt(rounds=self._rounds),
        ).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify ``password`` against a stored bcrypt hash.

        Timing-safe comparison (bcrypt inherently constant-time). A
        malformed hash verifies as False.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
