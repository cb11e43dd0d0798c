"""
Exceptions shared by the store and the service layer.

Services raise these; the endpoint modules translate them into
``HTTPException`` with the matching status code.
"""


class StoreError(Exception):
    """The document store failed to complete an operation."""


class ConstraintError(StoreError):
    """A write was rejected because it broke a uniqueness rule."""


class DuplicateError(Exception):
    """A user with the given email is already registered."""


class AuthError(Exception):
    """The supplied email/password pair does not match a user."""
