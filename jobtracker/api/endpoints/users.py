import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtracker.core.database import get_db
from jobtracker.core.deps import ensure_same_user, get_current_claim
from jobtracker.core.errors import NotFoundError
from jobtracker.core.security import TokenClaim
from jobtracker.crud import user as user_crud
from jobtracker.schemas.envelope import Envelope, MessageResponse
from jobtracker.schemas.user import UserResponse, UserUpdateRequest

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Envelope[List[UserResponse]])
def list_users(
    db: Session = Depends(get_db),
    claim: TokenClaim = Depends(get_current_claim)
):
    """List all registered users."""
    users = user_crud.get_multi(db)
    return Envelope[List[UserResponse]](
        message=f"Retrieved {len(users)} users",
        data=[UserResponse.model_validate(u) for u in users],
    )


@router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    claim: TokenClaim = Depends(get_current_claim)
):
    """Retrieve a user by ID."""
    user = user_crud.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    return Envelope[UserResponse](
        message=f"Retrieved user with id {user_id}",
        data=UserResponse.model_validate(user),
    )


@router.put("/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: int,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    claim: TokenClaim = Depends(get_current_claim)
):
    """
    Update username and email of the calling user.

    Users can only change their own account.
    """
    ensure_same_user(user_id, claim)

    user = user_crud.update(db, user_id, request)
    if not user:
        raise NotFoundError("User not found")

    logger.info(f"Updated user {user_id}")
    return Envelope[UserResponse](
        message=f"Updated user with id {user_id}",
        data=UserResponse.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    claim: TokenClaim = Depends(get_current_claim)
):
    """
    Delete the calling user's account and all of their jobs.

    Deleting an account that is already gone still succeeds.
    """
    ensure_same_user(user_id, claim)

    deleted = user_crud.delete(db, user_id)
    if deleted:
        logger.info(f"Deleted user {user_id}")

    return MessageResponse(message=f"Deleted user with id {user_id}")
