"""Exception handlers for converting exceptions to HTTP responses.

One handler per base exception; the HTTP status comes from the error_code
attribute via ERROR_CODE_TO_HTTP_STATUS.

To add a new exception:
1. Create the exception class (inheriting from ApplicationError or DomainException)
2. Add its error_code to ERROR_CODE_TO_HTTP_STATUS in error_codes.py
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.application.exceptions import ApplicationError
from app.domain.exceptions import DomainException
from app.presentation.error_codes import get_http_status_for_error_code

logger = logging.getLogger(__name__)


async def application_error_handler(
    request: Request, exc: ApplicationError
) -> JSONResponse:
    """
    Handle ALL application layer exceptions.

    Covers login failures and every refresh token failure reason.
    """
    http_status = get_http_status_for_error_code(exc.error_code)

    return JSONResponse(
        status_code=http_status,
        content={
            "detail": exc.message,
            "error_code": exc.error_code,
        },
    )


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """
    Handle ALL domain layer exceptions.

    Server-side faults (e.g. a missing signing secret) are logged and
    reported without their message.
    """
    http_status = get_http_status_for_error_code(exc.error_code)

    if http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Domain fault: {exc}", exc_info=True)
        return JSONResponse(
            status_code=http_status,
            content={
                "detail": "An internal server error occurred",
                "error_code": exc.error_code,
            },
        )

    return JSONResponse(
        status_code=http_status,
        content={
            "detail": exc.message,
            "error_code": exc.error_code,
        },
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors from request data.

    Returns a list of all validation errors with field locations and messages.
    """
    validation_errors = []
    for error in exc.errors():
        # Build field path (e.g., "body.email" or "body.refresh_token")
        field_location = ".".join(str(loc) for loc in error["loc"])

        validation_errors.append(
            {
                "field": field_location,
                "message": error["msg"],
            }
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation failed",
            "error_code": "VALIDATION_ERROR",
            "errors": validation_errors,
        },
    )


async def database_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """
    Handle storage faults.

    Ledger and credential store errors are never retried; the client gets an
    opaque error and must resubmit or log in again.
    """
    logger.error(f"Database error: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An internal database error occurred",
            "error_code": "DATABASE_ERROR",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all other unhandled exceptions.

    This is the catch-all handler for any unexpected errors.
    """
    logger.error(f"Unhandled error: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An internal server error occurred",
            "error_code": "INTERNAL_SERVER_ERROR",
        },
    )
