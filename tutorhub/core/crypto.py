"""Password hashing for marketplace accounts."""

from __future__ import annotations

import bcrypt

from tutorhub.core.config import get_settings


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Return a bcrypt hash of ``password`` using the configured work factor."""
    salt = bcrypt.gensalt(rounds=rounds or get_settings().security.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Malformed hashes (e.g. imported accounts) never match.
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["hash_password", "verify_password"]
