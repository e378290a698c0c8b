"""Request-scoped authentication and role checks for FastAPI routes."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jobportal.core.exceptions import ForbiddenError, UnauthorizedError
from jobportal.core.logger import get_logger
from jobportal.core.security import get_subject_from_token, validate_access_token
from jobportal.db.session import get_db
from jobportal.models import Role, User
from jobportal.services.auth import get_user_by_id, get_user_by_username

logger = get_logger("auth")

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class SecurityContext:
    """The principal behind one request, or an anonymous caller."""

    username: Optional[str] = None
    user_id: Optional[str] = None
    roles: frozenset[Role] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.username is not None

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return any(role in self.roles for role in roles)


ANONYMOUS = SecurityContext()


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None
    return None


def get_security_context(
    request: Request,
    db: Session = Depends(get_db),
) -> SecurityContext:
    """
    Resolve the caller of this request.

    Missing, invalid or expired tokens and tokens for unknown users all leave
    the request anonymous; routes that need a role reject it later. Roles are
    read from the database on every call, never from the token.
    """
    context = ANONYMOUS
    token = parse_bearer_token(request.headers.get("Authorization"))

    if token is not None and validate_access_token(token):
        username = get_subject_from_token(token)
        user = get_user_by_username(db, username)
        if user is None:
            logger.warning(f"Token subject {username!r} does not match any user")
        else:
            context = SecurityContext(
                username=user.username,
                user_id=user.id,
                roles=user.role_set,
            )

    request.state.security_context = context
    return context


def require_roles(*roles: Role):
    """
    Build a dependency that admits principals holding any of ``roles``.

    Without roles the dependency only requires an authenticated principal.
    """

    def guard(context: SecurityContext = Depends(get_security_context)) -> SecurityContext:
        if not context.is_authenticated:
            raise UnauthorizedError()
        if roles and not context.has_any_role(roles):
            logger.info(
                f"Denied {context.username}: needs one of "
                f"{[role.value for role in roles]}, has {[role.value for role in context.roles]}"
            )
            raise ForbiddenError()
        return context

    return guard


def get_current_user(
    context: SecurityContext = Depends(require_roles()),
    db: Session = Depends(get_db),
) -> User:
    """Load the authenticated user's record."""
    user = get_user_by_id(db, context.user_id)
    if user is None:
        raise UnauthorizedError()
    return user
