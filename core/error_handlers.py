"""Error handlers for FastAPI application.

Every failure is rendered with the same envelope the success paths use:
``{"success": false, "error": <message>, "details": <text>}``. The HTTP
status carries the category (400 validation, 401 auth, 404 not found,
503 retryable upstream failure, 500 unexpected).
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger
from typing import Any, Dict, Optional
import traceback

logger = get_logger("core.error_handlers")


def _format_details(details: Optional[Dict[str, Any]]) -> Optional[str]:
    if not details:
        return None
    return ", ".join(f"{key}={value}" for key, value in details.items())


def create_error_response(
    message: str,
    status_code: int = 500,
    details: Optional[str] = None,
) -> JSONResponse:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional diagnostic text.

    Returns:
        JSONResponse with the error envelope.
    """
    body = {"success": False, "error": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions.

    Args:
        request: FastAPI request object.
        exc: Application exception instance.

    Returns:
        JSONResponse with error details.
    """
    logger.warning(
        "Application error: %s [%s %s]",
        exc.message,
        request.method,
        request.url.path
    )

    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details=_format_details(exc.details),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors as 400 responses."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append(f"{field}: {error['msg']}")

    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors
    )

    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_400_BAD_REQUEST,
        details="; ".join(errors),
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy database errors.

    Args:
        request: FastAPI request object.
        exc: SQLAlchemy error.

    Returns:
        JSONResponse with database error details.
    """
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    # Don't expose internal database errors to clients
    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details="database_error",
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle all unhandled exceptions.

    Args:
        request: FastAPI request object.
        exc: Unhandled exception.

    Returns:
        JSONResponse with generic error message.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    # Log full traceback for debugging
    logger.error("Traceback: %s", traceback.format_exc())

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details=str(exc) or type(exc).__name__,
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
