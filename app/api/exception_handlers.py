"""
Map domain errors to HTTP responses.

Every AppError renders as {"detail": message, "code": CODE} with the status
from ERROR_STATUS; unknown subclasses fall back to 400.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    AppError,
    DuplicateEmailError,
    EmptyUpdateError,
    ForbiddenError,
    InvalidCredentialError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[AppError], int] = {
    DuplicateEmailError: status.HTTP_400_BAD_REQUEST,
    EmptyUpdateError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}


def status_for(exc: AppError) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in ERROR_STATUS:
            return ERROR_STATUS[exc_type]
    return status.HTTP_400_BAD_REQUEST


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = status_for(exc)
    logger.debug(
        "Request failed with %s",
        exc.code,
        extra={"path": request.url.path, "status_code": status_code},
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain error handler on the application."""
    app.add_exception_handler(AppError, app_error_handler)
