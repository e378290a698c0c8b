"""
Security utilities for authentication.

Provides password hashing (bcrypt) and JWT bearer token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidAlgorithmError,
    InvalidSignatureError,
    InvalidTokenError,
    MissingRequiredClaimError,
)
from passlib.context import CryptContext

from jobportal.core.config import settings
from jobportal.core.logger import get_logger

logger = get_logger("security")

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The hashed password string
    """
    return pwd_context.hash(password)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token for a username.

    The token only carries the subject; roles are looked up again on every
    request.

    Args:
        subject: The username to encode as the ``sub`` claim
        expires_delta: Optional custom validity window

    Returns:
        The encoded JWT token string
    """
    issued_at = datetime.now(timezone.utc)

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def _decode(token: str) -> dict:
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require": ["sub", "exp"]},
    )


def validate_access_token(token: Optional[str]) -> bool:
    """
    Check signature and expiry of a JWT access token.

    Never raises: every failure is logged and reported as False.
    """
    if token is None or not token.strip():
        logger.debug("JWT claims string is empty")
        return False

    try:
        _decode(token)
        return True
    except ExpiredSignatureError as e:
        logger.info(f"JWT token is expired: {e}")
    except InvalidSignatureError as e:
        logger.warning(f"Invalid JWT signature: {e}")
    except (InvalidAlgorithmError, MissingRequiredClaimError) as e:
        logger.warning(f"JWT token is unsupported: {e}")
    except DecodeError as e:
        logger.warning(f"Invalid JWT token: {e}")
    except InvalidTokenError as e:
        logger.warning(f"JWT token rejected: {e}")
    return False


def get_subject_from_token(token: str) -> str:
    """
    Extract the subject (username) from a token already known to be valid.

    Raises:
        InvalidTokenError: if the token does not verify
    """
    return _decode(token)["sub"]
