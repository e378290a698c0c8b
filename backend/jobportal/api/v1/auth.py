"""
Authentication API endpoints.

Handles user registration and sign-in with JWT token generation.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field, field_validator
from sqlalchemy.orm import Session

from jobportal.api.responses import acknowledged, bad_request, not_found
from jobportal.core.dependencies import get_current_user
from jobportal.core.exceptions import InvalidCredentialsError
from jobportal.core.logger import get_logger
from jobportal.core.security import create_access_token
from jobportal.db.session import get_db
from jobportal.models import User
from jobportal.schemas import ApiResponse, CamelModel
from jobportal.services.auth import (
    authenticate_user,
    change_password,
    is_email_available,
    is_username_available,
    register_user,
)

logger = get_logger("auth")

router = APIRouter()

EMAIL_MAX_LENGTH = 50


# ============== Pydantic Schemas ==============


class SignupRequest(CamelModel):
    """Schema for user registration."""

    username: str = Field(min_length=3, max_length=20)
    email: EmailStr
    password: str = Field(min_length=6, max_length=40)
    role: Optional[list[str]] = None  # e.g. ["recruiter"]; defaults to candidate

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
        return v


class SigninRequest(CamelModel):
    """Schema for sign-in credentials."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class JwtResponse(CamelModel):
    """Schema for the sign-in response."""

    access_token: str
    token_type: str = "Bearer"
    id: str
    username: str
    email: str
    roles: list[str]


class UserResponse(CamelModel):
    """Schema for user response (without password)."""

    id: str
    username: str
    email: str
    roles: list[str]


class PasswordChangeRequest(CamelModel):
    """Schema for changing the current user's password."""

    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=40)


# ============== API Endpoints ==============


@router.post("/signup", response_model=ApiResponse)
def signup(request: SignupRequest, db: Session = Depends(get_db)):
    """
    Register a new user.

    No token is issued; the caller signs in separately.
    """
    if not is_username_available(db, request.username):
        return bad_request("Error: Username is already taken!")

    if not is_email_available(db, request.email):
        return bad_request("Error: Email is already in use!")

    user = register_user(db, request.username, request.email, request.password, request.role)
    if user is None:
        return bad_request("Error: Username or email is already in use!")

    return acknowledged("User registered successfully!")


@router.post("/signin", response_model=JwtResponse)
def signin(request: SigninRequest, db: Session = Depends(get_db)):
    """
    Sign in and get a JWT access token.

    Wrong usernames and wrong passwords produce the same 401 response.
    """
    user = authenticate_user(db, request.username, request.password)

    if not user:
        logger.warning(f"Failed sign-in attempt for {request.username!r}")
        raise InvalidCredentialsError()

    access_token = create_access_token(subject=user.username)

    return JwtResponse(
        access_token=access_token,
        id=user.id,
        username=user.username,
        email=user.email,
        roles=user.authorities,
    )


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's account."""
    return UserResponse(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        roles=current_user.authorities,
    )


@router.put("/password", response_model=ApiResponse)
def update_password(
    request: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change the authenticated user's password."""
    try:
        user = change_password(db, current_user.id, request.old_password, request.new_password)
    except InvalidCredentialsError as exc:
        return bad_request(exc.message)

    if user is None:
        return not_found()

    return acknowledged("Password changed successfully")
