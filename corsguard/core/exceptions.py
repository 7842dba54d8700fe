"""Custom exceptions and exception handlers."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigError(AppError):
    """Invalid CORS policy.

    설정 단계에서만 발생하며, 잘못된 설정으로 서버가 요청을 처리하기 시작하면 안 된다.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class CORSForbiddenError(AppError):
    """Cross-origin request rejected by the policy."""

    def __init__(self, origin: str, reason: str = "origin"):
        self.origin = origin
        self.reason = reason
        message = f"CORS request from {origin!r} rejected ({reason} not allowed)"
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
        },
    )
