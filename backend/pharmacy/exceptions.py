import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pharmacy.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str, details: dict[str, Any] | None = None):
        self.error_type = error_type
        self.message = message
        self.details = details or {}
        super().__init__(message)


def invalid_input(message: str, **details) -> AppException:
    return AppException(ErrorType.INVALID_INPUT, message, details)


def not_found(message: str, **details) -> AppException:
    return AppException(ErrorType.NOT_FOUND, message, details)


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    content = {"detail": exc.message, "error": exc.error_type.value}
    if exc.details:
        content.update(jsonable_encoder(exc.details))
    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation failures are reported as invalid input."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "error": ErrorType.INVALID_INPUT.value,
        }
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error": ErrorType.INTERNAL_ERROR.value}
    )
