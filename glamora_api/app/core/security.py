"""
Password hashing helpers.

Passwords are hashed with bcrypt using a per-password random salt.
The cost factor comes from ``settings.bcrypt_rounds`` (10 by default).
bcrypt only looks at the first 72 bytes of a secret, so longer
passwords are truncated before hashing and verification.
"""

from typing import Optional

import bcrypt
from fastapi.concurrency import run_in_threadpool

from .config import settings

_MAX_SECRET_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_SECRET_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash ``password`` with bcrypt and return the modular-crypt string.

    ``rounds`` defaults to ``settings.bcrypt_rounds``; bcrypt rejects
    values outside 4..31 with ``ValueError``.
    """
    if rounds is None:
        rounds = settings.bcrypt_rounds
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a candidate password against a stored bcrypt hash.

    Returns ``False`` for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("ascii"))
    except ValueError:
        return False


class PasswordHasher:
    """Hasher collaborator handed to ``UserService``.

    Both operations run in the thread pool so a slow hash does not
    hold up other requests on the event loop.
    """

    def __init__(self, rounds: Optional[int] = None) -> None:
        self.rounds = settings.bcrypt_rounds if rounds is None else rounds

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(hash_password, password, self.rounds)

    async def verify(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(verify_password, password, hashed)
