"""
FastAPI dependencies for authentication and ownership scoping.

These dependencies are used to protect endpoints and extract the verified
identity of the caller.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Request

from jobtracker.core.errors import MissingTokenError, OwnershipError
from jobtracker.core.security import TokenClaim, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def get_token_service(request: Request) -> TokenService:
    """Token service built at startup (see main.create_app)."""
    return request.app.state.token_service


def extract_token(authorization: str) -> str:
    """
    Return the token carried by an Authorization header value.

    Existing clients send the raw token; a standard "Bearer <token>" value is
    accepted too.
    """
    value = authorization.strip()
    if value[:len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        return value[len(BEARER_PREFIX):].strip()
    return value


def get_current_claim(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaim:
    """
    Verify the caller's token and attach the claim to the request.

    This dependency:
    1. Rejects the request when the authorization header is absent
    2. Verifies signature and expiry of the token
    3. Stores the verified claim on request.state.claim

    Raises:
        AuthError: Missing, invalid or expired token. All three are rendered
            as the same 401 response.
    """
    if not authorization or not authorization.strip():
        raise MissingTokenError()

    claim = tokens.verify(extract_token(authorization))
    request.state.claim = claim
    return claim


def get_owner_id(
    user_id: int,
    claim: TokenClaim = Depends(get_current_claim),
) -> int:
    """
    Resolve the owner for /{user_id}/jobs routes.

    The owner is always the verified caller. The user_id path segment must
    name the same user, otherwise the request is rejected before any query runs.

    Usage:
        @router.get("/")
        def list_jobs(owner_id: int = Depends(get_owner_id), db: Session = Depends(get_db)):
            jobs = job_crud.get_multi(db, owner_id)
    """
    ensure_same_user(user_id, claim)
    return claim.id


def ensure_same_user(user_id: int, claim: TokenClaim) -> None:
    """Raise OwnershipError unless user_id is the verified caller."""
    if user_id != claim.id:
        logger.warning(f"User {claim.id} attempted to act on resources of user {user_id}")
        raise OwnershipError(f"Not allowed to access resources of user {user_id}")
