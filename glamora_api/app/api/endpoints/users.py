"""
Account endpoints: signup and login.

Login returns the user's id and email only; there is no token, so a
client that wants to stay "logged in" keeps this payload itself.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from glamora_api.app.api.deps import get_user_service
from glamora_api.app.core.errors import AuthError, DuplicateError, StoreError
from glamora_api.app.schemas.user import Credentials, LoginResponse, MessageResponse
from glamora_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Register a new user with a hashed password.

    A request without a body is treated like one with the fields
    missing.  A body that is not JSON at all is rejected by the
    application-wide handler with ``Invalid request body``.
    """
    try:
        data = Credentials.model_validate(payload or {})
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )
    try:
        await service.signup(data)
    except DuplicateError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    except StoreError:
        logger.exception("Error creating user %s", data.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating user",
        )
    return MessageResponse(message="User created successfully!")


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> LoginResponse:
    """Check an email/password pair.

    Unknown emails, wrong passwords and missing fields (or a missing
    body) all get the same 401 response.
    """
    try:
        data = Credentials.model_validate(payload or {})
        return await service.login(data)
    except (ValidationError, AuthError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    except StoreError:
        logger.exception("Server error during login")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during login",
        )
