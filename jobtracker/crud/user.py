"""
CRUD operations for User model.

Passwords are hashed on write and checked with bcrypt on login; the
plaintext is never stored.
"""

from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.core.errors import ConflictError, IncorrectPasswordError, UserNotFoundError
from jobtracker.core.security import hash_password, verify_password
from jobtracker.models.user import User
from jobtracker.schemas.user import UserRegisterRequest, UserUpdateRequest


def create(db: Session, user_data: UserRegisterRequest) -> User:
    """
    Register a new user with a hashed password.

    Args:
        db: Database session
        user_data: Validated registration data

    Returns:
        Created User instance with id

    Raises:
        ConflictError: If the username is already taken
    """
    if get_by_username(db, user_data.username):
        raise ConflictError("Username already exists")

    db_user = User(
        username=user_data.username,
        password=hash_password(user_data.password),
        email=user_data.email,
    )
    db.add(db_user)
    _commit_unique(db)
    db.refresh(db_user)

    return db_user


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_multi(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    The two failure cases keep their own messages for existing clients.

    Raises:
        UserNotFoundError: No user with this username
        IncorrectPasswordError: Password does not match the stored hash
    """
    user = get_by_username(db, username)
    if not user:
        raise UserNotFoundError()

    if not verify_password(password, user.password):
        raise IncorrectPasswordError()

    return user


def update(db: Session, user_id: int, user_data: UserUpdateRequest) -> Optional[User]:
    """
    Update username and email of a user.

    Returns:
        Updated User instance if found, None otherwise

    Raises:
        ConflictError: If the new username belongs to another user
    """
    user = get_by_id(db, user_id)
    if not user:
        return None

    existing = get_by_username(db, user_data.username)
    if existing and existing.id != user_id:
        raise ConflictError("Username already exists")

    user.username = user_data.username
    user.email = user_data.email
    _commit_unique(db)
    db.refresh(user)

    return user


def delete(db: Session, user_id: int) -> bool:
    """
    Delete a user and, through the relationship cascade, their jobs.

    Returns:
        True if deleted, False if not found
    """
    user = get_by_id(db, user_id)
    if not user:
        return False

    db.delete(user)
    db.commit()

    return True


def _commit_unique(db: Session) -> None:
    # Concurrent registrations can race past the username pre-check
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username already exists")
