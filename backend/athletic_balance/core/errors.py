from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class AppError(Exception):
    """Operational error carrying the HTTP status to answer with."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        is_operational: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.is_operational = is_operational


def handle_api_error(exc: Exception) -> JSONResponse:
    if isinstance(exc, AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
    logger.exception("Unhandled API error", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": UNEXPECTED_ERROR_MESSAGE},
    )


def classify_upstream_status(status_code: int | None) -> AppError:
    """Translate an upstream AI provider status into the error we answer with."""
    if status_code == 401:
        return AppError("AI service authentication failed", status.HTTP_503_SERVICE_UNAVAILABLE)
    if status_code == 429:
        return AppError(
            "AI service rate limit exceeded, please try again later",
            status.HTTP_429_TOO_MANY_REQUESTS,
        )
    if status_code is not None and status_code >= 500:
        return AppError("AI service temporarily unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)
    return AppError("Failed to generate response", status.HTTP_500_INTERNAL_SERVER_ERROR)


def upstream_timeout_error() -> AppError:
    return AppError("Request timeout, please try again", status.HTTP_408_REQUEST_TIMEOUT)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return handle_api_error(exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return handle_api_error(exc)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = errors[0].get("msg", "Invalid request")
        detail = f"{location}: {message}" if location else message
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": detail})
