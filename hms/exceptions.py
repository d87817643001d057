"""
Global exception handlers and application exception classes.

Every failure leaves the API as ``{"error": <code>, "detail": <message>}``
so clients can branch on a stable error kind instead of message text.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, Optional
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    error_code = "APPLICATION_ERROR"

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        if error_code:
            self.error_code = error_code
        self.headers = headers


class ValidationException(AppException):
    """Raised when a request field is missing or malformed."""
    error_code = "VALIDATION_ERROR"

    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ResourceNotFoundException(AppException):
    """Raised when a requested resource does not exist."""
    error_code = "NOT_FOUND"

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class PersistenceException(AppException):
    """Raised when the database fails unexpectedly. Never carries driver detail."""
    error_code = "PERSISTENCE_ERROR"

    def __init__(self, detail: str = "An unexpected database error occurred"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "detail": exc.detail},
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    logger.info(f"Validation error on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": ValidationException.error_code,
            "detail": "Validation error",
            "errors": errors
        }
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Handler for database errors that escaped the service layer.

    The driver message is logged but never returned to the client.
    """
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": PersistenceException.error_code, "detail": "An unexpected database error occurred"}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler so unexpected failures keep the error shape.

    The exception is logged with its traceback and never echoed to the client.
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "INTERNAL_ERROR", "detail": "An unexpected error occurred"}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
