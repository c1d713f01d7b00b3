"""Exception handlers for the planner FastAPI application.

This module converts scheduling exceptions into consistent JSON responses.
The exceptions themselves live in ``scheduling.exceptions`` so the core has
no dependency on the web layer.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from scheduling.exceptions import (
    ConflictError,
    InvalidArgumentError,
    InvalidRecurrenceRuleError,
    InvalidSkipDayError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


# Exception Handlers
# These convert exceptions into JSON responses


async def conflict_error_handler(request: Request, exc: ConflictError):
    """Handle ConflictError exceptions.

    Returns a 409 (Conflict) listing every existing commitment the candidate
    collides with.

    Args:
        request: The incoming request that triggered the error.
        exc: The ConflictError exception.

    Returns:
        JSONResponse with 409 status and the conflicting IDs.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Scheduling Conflict",
            "detail": str(exc),
            "conflicting_ids": sorted(exc.conflicting_ids),
        },
    )


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    """Handle InvalidArgumentError exceptions and their subclasses.

    Recurrence rule errors carry a machine-readable code and skip-day errors
    carry the offending dates; both are included when present.

    Args:
        request: The incoming request that triggered the error.
        exc: The InvalidArgumentError exception.

    Returns:
        JSONResponse with 400 status.
    """
    content = {
        "error": "Invalid Argument",
        "detail": exc.message,
        "type": type(exc).__name__,
    }
    if isinstance(exc, InvalidRecurrenceRuleError):
        content["code"] = exc.code
    if isinstance(exc, InvalidSkipDayError):
        content["invalid_days"] = sorted(str(day) for day in exc.invalid_days)

    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def not_found_handler(request: Request, exc: NotFoundError):
    """Handle NotFoundError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The NotFoundError exception.

    Returns:
        JSONResponse with 404 status.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not Found",
            "detail": str(exc),
            "entity": exc.entity,
            "entity_id": exc.entity_id,
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised while building domain models.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(
                include_url=False, include_context=False, include_input=False
            ),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions not covered by a more specific handler.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It logs the full
    traceback and keeps it out of the response.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
