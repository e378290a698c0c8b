"""
Exception types and handlers shared by every API route.

Expected business failures (not found, duplicates) are returned as None by the
services and mapped to 404/400 responses by the routes. The classes here cover
authentication/authorization failures, profile ownership conflicts raised
by updates, and the catch-all error responses.
"""

from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobportal.core.logger import get_logger

logger = get_logger("errors")

UNAUTHORIZED_MESSAGE = "Full authentication is required to access this resource"
FORBIDDEN_MESSAGE = "You don't have permission to access this resource"


class AuthenticationError(Exception):
    """Base authentication error."""

    def __init__(self, message: str = UNAUTHORIZED_MESSAGE):
        super().__init__(message)
        self.message = message


class UnauthorizedError(AuthenticationError):
    """A protected route was called without a valid bearer token."""


class InvalidCredentialsError(AuthenticationError):
    """Username or password did not match."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class ForbiddenError(Exception):
    """The principal is authenticated but lacks every required role."""

    def __init__(self, message: str = FORBIDDEN_MESSAGE):
        super().__init__(message)
        self.message = message


class ProfileConflictError(Exception):
    """A profile write would give a user a second profile of the same kind."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error_body(status_code: int, error: str, message: str, request: Request) -> dict:
    return {
        "status": status_code,
        "error": error,
        "message": message,
        "path": request.url.path,
    }


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=_error_body(status.HTTP_401_UNAUTHORIZED, "Unauthorized", exc.message, request),
        headers={"WWW-Authenticate": "Bearer"},
    )


async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": exc.message},
    )


async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content=_error_body(status.HTTP_403_FORBIDDEN, "Access Denied", exc.message, request),
    )


async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        errors.setdefault(field, error.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "timestamp": datetime.utcnow().isoformat(),
            "status": status.HTTP_400_BAD_REQUEST,
            "error": "Validation Failed",
            "message": "Invalid input",
            "errors": errors,
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred",
            request,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error responses to the application."""
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(ForbiddenError, forbidden_handler)
    app.add_exception_handler(RequestValidationError, validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
