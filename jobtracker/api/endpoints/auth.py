"""
Authentication endpoints for user registration and login.

- POST /register: Create new user account
- POST /login: Authenticate and receive a one hour access token
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobtracker.core.database import get_db
from jobtracker.core.deps import get_token_service
from jobtracker.core.security import TokenService
from jobtracker.crud import user as user_crud
from jobtracker.schemas.envelope import Envelope
from jobtracker.schemas.user import (
    LoginResponse,
    UserCreatedResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)

router = APIRouter(tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=Envelope[UserCreatedResponse])
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    The response echoes the created row, including the bcrypt hash that was
    stored in place of the password.
    """
    new_user = user_crud.create(db, request)

    logger.info(f"New user registered: {new_user.username} (id: {new_user.id})")

    return Envelope[UserCreatedResponse](
        message=f"User {new_user.username} registered successfully",
        data=UserCreatedResponse.model_validate(new_user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service)
):
    """
    Authenticate user and return an access token.

    The token is valid for one hour and must be sent back in the
    Authorization header.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    token = tokens.issue(user.id)

    logger.info(f"User logged in: {user.username} (id: {user.id})")

    return LoginResponse(
        message=f"User {user.username} logged in successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )
