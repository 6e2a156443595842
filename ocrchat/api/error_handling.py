"""
Service error handling for API endpoints.

Maps the application exception hierarchy to HTTP status codes in one
place so routers stay free of try/except blocks.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from ocrchat.core.exceptions import (
    AIFailureError,
    BadRequestError,
    ExtractionEngineError,
    ForbiddenError,
    NotFoundError,
    OcrChatException,
    StoreUnavailableError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_EXCEPTION: list[tuple[type[OcrChatException], int]] = [
    (BadRequestError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedFileTypeError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AIFailureError, status.HTTP_502_BAD_GATEWAY),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ExtractionEngineError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: OcrChatException) -> int:
    """HTTP status for an application exception (500 when unmapped)."""
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_service_errors(func: F) -> F:
    """
    Decorator transforming application exceptions into HTTPExceptions.

    Client errors are logged at WARNING, server-side failures at ERROR.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except OcrChatException as e:
            status_code = status_for(e)
            log = logger.warning if status_code < 500 else logger.error
            log(
                f"{func.__name__} failed with {type(e).__name__}",
                extra={"status_code": status_code, "error": str(e)},
            )
            raise HTTPException(status_code=status_code, detail=e.message) from e

    return wrapper  # type: ignore[return-value]
