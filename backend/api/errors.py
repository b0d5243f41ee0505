"""
Global error handlers.

Every error body is rendered as {"message": ...}; login failures also carry
"success": false. Validation failures are reported as 400 with the
endpoint's "required fields" message, and unexpected exceptions never leak
internal details.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGES = {
    "/signup": "All fields are required",
    "/login": "Email and image are required",
}

FAILURE_MESSAGES = {
    "/signup": "Signup failed. Try again.",
    "/login": "Login failed. Try again.",
}


class ApiError(StarletteHTTPException):
    """HTTP error with a human-readable message and optional extra body fields."""

    def __init__(self, status_code: int, message: str, **extra):
        super().__init__(status_code=status_code, detail=message)
        self.extra = extra

    def to_response(self) -> dict:
        return {**self.extra, "message": self.detail}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, ApiError):
            content = exc.to_response()
        else:
            content = {"message": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        message = REQUIRED_FIELDS_MESSAGES.get(request.url.path, "Invalid request data")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        message = FAILURE_MESSAGES.get(request.url.path, "An unexpected error occurred")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": message},
        )
