"""
Business logic for user accounts.

A user is an email plus a bcrypt hash of the password.  Signup runs
the steps duplicate check, hash, insert in that order; the check is
not atomic with the insert, so a concurrent signup for the same email
can still fail at insert time on the unique index.  Both paths raise
``DuplicateError``.
"""

import logging

from glamora_api.app.core.db import DocumentStore
from glamora_api.app.core.errors import AuthError, ConstraintError, DuplicateError
from glamora_api.app.core.security import PasswordHasher
from glamora_api.app.schemas.user import Credentials, LoginResponse

logger = logging.getLogger(__name__)

COLLECTION = "users"


class UserService:
    """Signup and login against the ``users`` collection."""

    def __init__(self, store: DocumentStore, hasher: PasswordHasher) -> None:
        self.store = store
        self.hasher = hasher

    async def signup(self, data: Credentials) -> None:
        """Register a new user.

        Raises ``DuplicateError`` when the email is already registered
        and ``StoreError`` for any other storage failure.
        """
        existing = await self.store.find_one(COLLECTION, {"email": data.email})
        if existing:
            raise DuplicateError(data.email)
        hashed = await self.hasher.hash(data.password)
        try:
            await self.store.insert(COLLECTION, {"email": data.email, "password": hashed})
        except ConstraintError as exc:
            # Lost the race against a concurrent signup.
            raise DuplicateError(data.email) from exc
        logger.info("Registered user %s", data.email)

    async def login(self, data: Credentials) -> LoginResponse:
        """Check credentials and return the user's identity fields.

        Unknown emails and wrong passwords both raise ``AuthError`` so
        callers cannot tell them apart.
        """
        user = await self.store.find_one(COLLECTION, {"email": data.email})
        if not user or not await self.hasher.verify(data.password, user.get("password", "")):
            raise AuthError(data.email)
        return LoginResponse(message="Login successful!", userId=user["_id"], email=user["email"])
