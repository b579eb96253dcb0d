"""Custom error handlers and exceptions for the application."""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional, Union

from .logging_config import get_logger

logger = get_logger("error_handlers")


class AppException(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict = None,
        headers: Optional[dict] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


class ResourceNotFoundError(AppException):
    """
    Raised when a requested resource is not found.

    Also used when the resource exists but belongs to somebody else, so the
    caller cannot tell the two cases apart.
    """

    def __init__(self, resource: str, identifier: Union[int, str]):
        super().__init__(
            message=f"{resource} with identifier '{identifier}' not found",
            status_code=404,
            details={"resource": resource, "identifier": str(identifier)}
        )


class DuplicateKeyError(AppException):
    """Raised when attempting to create a record with an already used unique key."""

    def __init__(self, resource: str, field: str, value: str):
        self.field = field
        super().__init__(
            message=f"{resource} with {field} '{value}' already exists",
            status_code=409,
            details={"resource": resource, "field": field}
        )


class ValidationError(AppException):
    """Raised when data validation fails."""

    def __init__(self, message: str, errors: list = None):
        self.errors = errors or []
        super().__init__(
            message=message,
            status_code=422,
            details={"validation_errors": self.errors}
        )

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]


class AuthenticationError(AppException):
    """Raised when a bearer credential is missing, invalid or expired."""

    MISSING = "missing"
    INVALID = "invalid"
    EXPIRED = "expired"
    CREDENTIALS = "credentials"

    _messages = {
        MISSING: "Access token required",
        INVALID: "Invalid token",
        EXPIRED: "Token expired",
        CREDENTIALS: "Invalid credentials",
    }

    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        super().__init__(
            message=message or self._messages.get(reason, "Not authenticated"),
            status_code=401 if reason in (self.MISSING, self.CREDENTIALS) else 403,
            details={"reason": reason},
            headers={"WWW-Authenticate": "Bearer"}
        )


class UpstreamUnavailableError(Exception):
    """
    Raised when a third-party service cannot be reached or answers garbage.

    Internal only: callers recover locally (the weather proxy serves its
    fallback report), so it carries no HTTP status and has no handler.
    """

    def __init__(self, service: str, reason: str):
        self.service = service
        self.message = f"{service} unavailable: {reason}"
        super().__init__(self.message)


async def app_exception_handler(request: Request, exc: AppException):
    """Handler for custom application exceptions."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"Application error: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details,
            "path": request.url.path
        },
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler for request validation errors."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"validation_errors": errors}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation failed",
            "validation_errors": errors,
            "path": request.url.path
        }
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handler for SQLAlchemy database errors."""
    logger.error(
        f"Database error: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Database error occurred",
            "path": request.url.path
        }
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handler for unexpected exceptions."""
    logger.critical(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__
        },
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred. Please contact support if the issue persists.",
            "path": request.url.path
        }
    )
