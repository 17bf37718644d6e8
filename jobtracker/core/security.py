"""
Security utilities for JWT authentication and password hashing.

Passwords are hashed with bcrypt (cost factor 10) through passlib.
Access tokens are HS256 JWTs carrying the user id and a one hour expiry.
There are no refresh tokens: an expired token means logging in again.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from jobtracker.core.errors import (
    TokenConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72
DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)

# Password hashing context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:BCRYPT_MAX_BYTES]
    try:
        return pwd_context.verify(password_bytes, hashed_password)
    except (ValueError, TypeError):
        # Stored value is not a recognisable hash
        return False


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt with a fresh salt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    password_bytes = password.encode('utf-8')[:BCRYPT_MAX_BYTES]
    return pwd_context.hash(password_bytes)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaim:
    """Verified identity carried by an access token."""
    id: int
    expires_at: datetime


class TokenService:
    """
    Issues and verifies signed access tokens.

    Built once at startup with the process-wide signing secret and handed to
    request handlers through FastAPI dependencies.

    Args:
        secret: HMAC signing key. Issuing with an empty secret raises.
        algorithm: JWT signing algorithm
        lifetime: How long an issued token stays valid
        clock: Returns the current aware datetime (injectable for tests)
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime
        self._clock = clock or _utcnow

    def issue(self, identity_id: int) -> str:
        """
        Create a signed token for the given user id.

        Raises:
            TokenConfigurationError: If no signing secret is configured
        """
        if not self._secret:
            raise TokenConfigurationError()

        # exp is encoded in whole seconds; truncate now so exp - iat == lifetime
        now = self._clock().replace(microsecond=0)
        to_encode = {
            "id": identity_id,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaim:
        """
        Validate signature and expiry of a token.

        Expiry is checked against the service clock with no leeway, so a token
        is accepted up to and including its exp second and rejected after it.

        Raises:
            TokenInvalidError: Malformed, unsigned or tampered token
            TokenExpiredError: Token past its expiry
        """
        if not self._secret:
            raise TokenInvalidError("No signing secret configured")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise TokenInvalidError(str(e))

        identity_id = payload.get("id")
        exp = payload.get("exp")
        if not isinstance(identity_id, int) or isinstance(identity_id, bool):
            raise TokenInvalidError("Token has no identity claim")
        if not isinstance(exp, (int, float)):
            raise TokenInvalidError("Token has no expiry claim")

        if self._clock().timestamp() > exp:
            raise TokenExpiredError()

        return TokenClaim(
            id=identity_id,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
