"""
Authentication flow: account lookups, signup, signin and password changes.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.exceptions import InvalidCredentialsError
from jobportal.core.logger import get_logger
from jobportal.core.security import get_password_hash, verify_password
from jobportal.models import Role, User

logger = get_logger("auth")


def get_user_by_id(db: Session, user_id: Optional[str]) -> Optional[User]:
    if not user_id:
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def is_username_available(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is None


def is_email_available(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is None


def register_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    requested_roles: Optional[Iterable[str]] = None,
) -> Optional[User]:
    """
    Create a user account with a bcrypt password hash.

    Callers check username/email availability first for a precise error
    message. The unique indexes still decide concurrent signups; losing that
    race returns None.
    """
    roles = Role.from_requested(requested_roles)
    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
        roles=sorted(role.value for role in roles),
    )

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Signup for {username!r} lost a uniqueness race")
        return None

    db.refresh(user)
    logger.info(f"Registered user {user.username} with roles {user.roles}")
    return user


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def change_password(
    db: Session,
    user_id: str,
    old_password: str,
    new_password: str,
) -> Optional[User]:
    """
    Replace a user's password hash.

    Returns None when the user does not exist.

    Raises:
        InvalidCredentialsError: if ``old_password`` does not match
    """
    user = get_user_by_id(db, user_id)
    if user is None:
        return None

    if not verify_password(old_password, user.hashed_password):
        raise InvalidCredentialsError("Invalid old password")

    user.hashed_password = get_password_hash(new_password)
    user.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"Password changed for user {user.username}")
    return user
