from fastapi import Response, status
from fastapi.responses import JSONResponse

from jobportal.schemas import ApiResponse


def not_found() -> Response:
    """404 with an empty body."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)


def bad_request(message: str) -> JSONResponse:
    """400 carrying an ``{"success": false, "message": ...}`` body."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ApiResponse(success=False, message=message).model_dump(),
    )


def acknowledged(message: str) -> ApiResponse:
    return ApiResponse(success=True, message=message)
