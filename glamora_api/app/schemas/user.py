"""
Pydantic models for signup and login.

Passwords only ever travel inbound; the stored bcrypt hash is never
part of a response.  Login hands back identity fields only, there is
no token or session.
"""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Email/password pair accepted by both signup and login."""

    email: str = Field(..., min_length=1, examples=["a@example.com"])
    password: str = Field(..., min_length=1, examples=["s3cret"])


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """Returned by a successful login."""

    message: str = Field(..., examples=["Login successful!"])
    userId: str
    email: str
