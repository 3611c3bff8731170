"""Perfect Pic auth infrastructure -- password hashing."""

from perfectpic.infra.auth.password_hasher import DEFAULT_BCRYPT_ROUNDS, BcryptPasswordHasher

__all__ = ["DEFAULT_BCRYPT_ROUNDS", "BcryptPasswordHasher"]
