"""Domain exceptions and the global exception-to-HTTP translation.

This module defines the exceptions raised by the service layer and the
ordered table that turns any exception reaching the request boundary into
an HTTP status code and a plain-text body. Specific kinds are matched before
the catch-all arm, so a broad handler never shadows a narrower one.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Resource ID not found."
UNEXPECTED_ERROR_MESSAGE = "Unexpected server error, see the logs."


class APIException(Exception):
    """Base exception class for API errors.

    This is the base class for all domain exceptions, providing
    consistent error structure and HTTP status code handling.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for the error
            error_code: Machine-readable error code
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__.lower().replace(
            "exception", "_error"
        )
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(APIException):
    """Exception for resource not found errors."""

    def __init__(
        self, resource: str, identifier: str | int, message: str | None = None
    ) -> None:
        if not message:
            message = f"{resource} with identifier '{identifier}' not found"

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="not_found_error",
            details={"resource": resource, "identifier": str(identifier)},
        )


class BusinessLogicException(APIException):
    """Exception for business rule violations in caller-supplied data."""

    def __init__(self, message: str, rule: str | None = None) -> None:
        details = {}
        if rule:
            details["rule"] = rule

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code="business_logic_error",
            details=details,
        )


@dataclass(frozen=True)
class ErrorTranslation:
    """HTTP rendering of an exception that reached the request boundary."""

    status_code: int
    body: str
    log_level: int


# Ordered most specific first; the first matching arm wins.
ERROR_TRANSLATIONS: tuple[tuple[type[BaseException], Callable[[BaseException], ErrorTranslation]], ...] = (
    (
        BusinessLogicException,
        lambda exc: ErrorTranslation(
            status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message, logging.INFO
        ),
    ),
    (
        NotFoundException,
        lambda exc: ErrorTranslation(
            status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE, logging.INFO
        ),
    ),
)

UNEXPECTED_ERROR = ErrorTranslation(
    status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE, logging.ERROR
)


def translate_exception(exc: BaseException) -> ErrorTranslation:
    """Map an exception to its HTTP status code and response body.

    Args:
        exc: Exception raised while handling a request

    Returns:
        ErrorTranslation: The first matching arm, or the catch-all 500
    """
    for exc_type, render in ERROR_TRANSLATIONS:
        if isinstance(exc, exc_type):
            return render(exc)
    return UNEXPECTED_ERROR


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "client_ip": request.client.host if request.client else None,
        "request_id": getattr(request.state, "request_id", None),
    }


# Global Exception Handlers


async def domain_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handle domain exceptions raised by the service layer.

    Args:
        request: FastAPI request object
        exc: Domain exception instance

    Returns:
        PlainTextResponse: Translated status code and message
    """
    translation = translate_exception(exc)
    if translation is UNEXPECTED_ERROR:
        return await generic_exception_handler(request, exc)

    logger.log(
        translation.log_level,
        f"Domain Exception: {type(exc).__name__} - {exc}",
        extra={
            "status_code": translation.status_code,
            "exception_type": type(exc).__name__,
            **_request_context(request),
        },
    )
    return PlainTextResponse(translation.body, status_code=translation.status_code)


async def generic_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handle unexpected exceptions.

    The full error, traceback included, goes to the server log only; the
    caller gets the fixed opaque message.

    Args:
        request: FastAPI request object
        exc: Exception instance

    Returns:
        PlainTextResponse: 500 response with the fixed message
    """
    logger.error(
        f"Unexpected Exception: {type(exc).__name__} - {str(exc)}",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "exception_type": type(exc).__name__,
            **_request_context(request),
        },
    )
    return PlainTextResponse(
        UNEXPECTED_ERROR.body, status_code=UNEXPECTED_ERROR.status_code
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request payload validation errors.

    Args:
        request: FastAPI request object
        exc: Validation error instance

    Returns:
        JSONResponse: 422 response listing the failing fields
    """
    validation_errors = []
    for error in exc.errors():
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        validation_errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(
        f"Validation Error: {len(validation_errors)} field(s) failed validation",
        extra={
            "validation_errors": validation_errors,
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": validation_errors},
    )
