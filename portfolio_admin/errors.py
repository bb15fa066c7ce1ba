"""
Error taxonomy for Portfolio Admin.

Every failure that leaves a service is an ``AppError`` carrying one
``ErrorType`` from a closed set, a short message safe to show an editor and
the technical detail for logs. Database and storage exceptions are classified
here so that callers never see raw driver errors.
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, TypeVar

import structlog
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm.exc import StaleDataError

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


class ErrorType(str, Enum):
    """Closed set of failure kinds."""

    # Authentication
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Database
    NOT_FOUND = "NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

    # Storage
    UPLOAD_FAILED = "UPLOAD_FAILED"

    # Network
    NETWORK_ERROR = "NETWORK_ERROR"

    # Operation
    CREATE_FAILED = "CREATE_FAILED"
    UPDATE_FAILED = "UPDATE_FAILED"
    DELETE_FAILED = "DELETE_FAILED"

    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class AppError(Exception):
    """An application error with a user-facing message."""

    def __init__(
        self,
        error_type: ErrorType,
        user_message: str,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(technical_message or user_message)
        self.type = error_type
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.user_message,
            "detail": self.technical_message,
        }

    def __repr__(self) -> str:
        return f"AppError({self.type.value}, {self.user_message!r})"


class ErrorMessages:
    """Message templates shared by services and routes."""

    UNAUTHORIZED = "You must be logged in to perform this action."
    FORBIDDEN = "You don't have permission to perform this action."

    ARTWORK_NOT_FOUND = "Artwork not found. It may have been deleted."
    ARTWORK_CREATE_FAILED = (
        "Failed to create artwork. Please check your input and try again."
    )
    ARTWORK_UPDATE_FAILED = "Failed to update artwork. Please try again."
    ARTWORK_DELETE_FAILED = (
        "Failed to delete artwork. It may be referenced by other data."
    )
    ARTWORK_DUPLICATE_SLUG = (
        "An artwork with this slug already exists. Please use a different slug."
    )

    PERFORMANCE_NOT_FOUND = "Performance not found. It may have been deleted."
    PERFORMANCE_CREATE_FAILED = (
        "Failed to create performance. Please check your input and try again."
    )
    PERFORMANCE_UPDATE_FAILED = "Failed to update performance. Please try again."
    PERFORMANCE_DELETE_FAILED = "Failed to delete performance. Please try again."
    PERFORMANCE_DUPLICATE_SLUG = (
        "A performance with this slug already exists. Please use a different slug."
    )

    PAGE_NOT_FOUND = "Page not found. It may have been deleted."
    PAGE_CREATE_FAILED = "Failed to create page. Please check your input and try again."
    PAGE_UPDATE_FAILED = "Failed to update page. Please try again."
    PAGE_DELETE_FAILED = "Failed to delete page. It may have child pages."
    PAGE_DUPLICATE_SLUG = (
        "A page with this slug already exists. Please use a different slug."
    )

    BLOG_NOT_FOUND = "Blog post not found. It may have been deleted."
    BLOG_CREATE_FAILED = (
        "Failed to create blog post. Please check your input and try again."
    )
    BLOG_UPDATE_FAILED = "Failed to update blog post. Please try again."
    BLOG_DELETE_FAILED = "Failed to delete blog post. Please try again."
    BLOG_DUPLICATE_SLUG = (
        "A blog post with this slug already exists. Please use a different slug."
    )

    MEDIA_NOT_FOUND = "Media file not found. It may have been deleted."
    MEDIA_CREATE_FAILED = "Failed to upload media. Please check the file and try again."
    MEDIA_UPDATE_FAILED = "Failed to update media. Please try again."
    MEDIA_DELETE_FAILED = "Failed to delete media. It may be used by other content."
    MEDIA_UPLOAD_FAILED = (
        "Failed to upload file to storage. Please check your connection and try again."
    )

    EXHIBITION_NOT_FOUND = "Exhibition not found."
    EXHIBITION_UPDATE_FAILED = "Failed to update exhibition. Please try again."
    EXHIBITION_DELETE_FAILED = (
        "Failed to delete exhibition. It may be referenced by artworks."
    )

    COLLECTION_NOT_FOUND = "Collection not found."
    COLLECTION_UPDATE_FAILED = "Failed to update collection. Please try again."
    COLLECTION_DELETE_FAILED = "Failed to delete collection. Please try again."
    COLLECTION_NAME_REQUIRED = "Collection name is required."
    COLLECTION_NO_ARTWORKS = "Please select at least one artwork for the collection."
    COLLECTION_SAME_NAME = "The new collection name must be different."

    NO_ARTWORKS_SELECTED = "Please select at least one artwork."
    CONCURRENT_MODIFICATION = (
        "This item was modified by someone else. Please reload and try again."
    )

    REQUIRED_FIELD = "This field is required."
    INVALID_FORMAT = "Invalid format. Please check your input."
    INVALID_SLUG = (
        "Slug must contain only lowercase letters, numbers, and single hyphens."
    )

    NETWORK_ERROR = "Network error. Please check your connection and try again."
    UNKNOWN_ERROR = "An unexpected error occurred. Please try again."
    FETCH_FAILED = "Failed to load data. Please refresh the page."


# HTTP status per error kind; anything unlisted is a 500.
HTTP_STATUS: Dict[ErrorType, int] = {
    ErrorType.REQUIRED_FIELD: 422,
    ErrorType.VALIDATION_ERROR: 422,
    ErrorType.INVALID_FORMAT: 422,
    ErrorType.DUPLICATE_ENTRY: 409,
    ErrorType.CONSTRAINT_VIOLATION: 409,
    ErrorType.NOT_FOUND: 404,
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.FORBIDDEN: 403,
}


def http_status_for(error: AppError) -> int:
    return HTTP_STATUS.get(error.type, 500)


_OPERATION_FAILURES = {
    "create": ErrorType.CREATE_FAILED,
    "update": ErrorType.UPDATE_FAILED,
    "delete": ErrorType.DELETE_FAILED,
    "fetch": ErrorType.DATABASE_ERROR,
}

_CONNECTION_MARKERS = (
    "could not connect",
    "connection refused",
    "connection reset",
    "server closed the connection",
    "unable to open database file",
    "timeout",
    "network",
)


def _sqlstate(exc: BaseException) -> Optional[str]:
    """Best-effort SQLSTATE extraction from a DBAPI exception."""
    orig = getattr(exc, "orig", None)
    for candidate in (orig, getattr(orig, "diag", None)):
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode"):
            code = getattr(candidate, attr, None)
            if code:
                return str(code)
    return None


def operation_failure(operation: str, resource: str, detail: str) -> AppError:
    """Operation-specific fallback error."""
    noun = resource.lower()
    messages = {
        "create": f"Failed to create {noun}. Please check your input and try again.",
        "update": f"Failed to update {noun}. Please try again.",
        "delete": f"Failed to delete {noun}. Please try again.",
        "fetch": f"Failed to load {noun}. Please refresh the page.",
    }
    return AppError(
        _OPERATION_FAILURES.get(operation, ErrorType.UNKNOWN_ERROR),
        messages.get(operation, ErrorMessages.UNKNOWN_ERROR),
        detail or "Unknown database error",
        {"operation": operation, "resource": resource},
    )


def parse_db_error(exc: BaseException, operation: str, resource: str) -> AppError:
    """Classify a database-layer exception.

    Args:
        exc: The exception raised by SQLAlchemy or the driver
        operation: One of "create", "update", "delete", "fetch"
        resource: Human-readable resource name (e.g., "Artwork")

    Returns:
        AppError with the matching ErrorType
    """
    if isinstance(exc, AppError):
        return exc

    noun = resource.lower()
    message = str(getattr(exc, "orig", None) or exc)
    lowered = message.lower()
    code = _sqlstate(exc)

    if isinstance(exc, NoResultFound):
        return AppError(
            ErrorType.NOT_FOUND,
            f"{resource} not found. It may have been deleted.",
            message,
        )

    if isinstance(exc, StaleDataError):
        return AppError(
            ErrorType.UPDATE_FAILED,
            ErrorMessages.CONCURRENT_MODIFICATION,
            f"{resource} modified concurrently: {message}",
        )

    if code == "23505" or "unique constraint failed" in lowered:
        return AppError(
            ErrorType.DUPLICATE_ENTRY,
            f"A {noun} with this value already exists.",
            message,
            {"code": code},
        )

    if code == "23503" or "foreign key constraint failed" in lowered:
        return AppError(
            ErrorType.CONSTRAINT_VIOLATION,
            f"Cannot {operation} {noun} because it is referenced by other data.",
            message,
            {"code": code},
        )

    if code == "42501":
        return AppError(
            ErrorType.FORBIDDEN,
            f"You don't have permission to {operation} this {noun}.",
            message,
            {"code": code},
        )

    if isinstance(exc, (OperationalError, DBAPIError)) and (
        getattr(exc, "connection_invalidated", False)
        or any(marker in lowered for marker in _CONNECTION_MARKERS)
    ):
        return AppError(ErrorType.NETWORK_ERROR, ErrorMessages.NETWORK_ERROR, message)

    if isinstance(exc, IntegrityError):
        return AppError(
            ErrorType.CONSTRAINT_VIOLATION,
            f"Cannot {operation} {noun} because it violates a data constraint.",
            message,
            {"code": code},
        )

    return operation_failure(operation, resource, message)


def parse_storage_error(exc: BaseException, file_name: Optional[str] = None) -> AppError:
    """Classify an object-storage failure."""
    if isinstance(exc, AppError):
        return exc

    message = str(exc)
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return AppError(ErrorType.NETWORK_ERROR, ErrorMessages.NETWORK_ERROR, message)

    label = f'"{file_name}" ' if file_name else ""
    return AppError(
        ErrorType.UPLOAD_FAILED,
        f"Failed to upload file {label}to storage. Please try again.",
        message,
        {"file_name": file_name} if file_name else None,
    )


def validate_required(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise REQUIRED_FIELD for the first missing or blank field."""
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise AppError(
                ErrorType.REQUIRED_FIELD,
                f"{name} is required.",
                f"Missing required field: {name}",
                {"field": name},
            )


def format_error_for_user(exc: BaseException) -> str:
    if isinstance(exc, AppError):
        return exc.user_message
    return ErrorMessages.UNKNOWN_ERROR


def log_error(exc: BaseException, **context: Any) -> None:
    """Log an error with its classification and call-site context."""
    if isinstance(exc, AppError):
        logger.error(
            "app_error",
            error_type=exc.type.value,
            user_message=exc.user_message,
            technical_message=exc.technical_message,
            **{**exc.context, **context},
        )
    else:
        logger.error(
            "unexpected_error",
            error=str(exc),
            error_class=type(exc).__name__,
            **context,
        )


def wrap_errors(
    operation: str, resource: str, user_message: Optional[str] = None
) -> Callable[[F], F]:
    """Decorate a service method so every failure leaves as an AppError.

    ``AppError`` passes through unchanged, ``SQLAlchemyError`` is classified by
    ``parse_db_error`` and anything else becomes the operation-specific
    failure. The instance's ``db`` session, if any, is rolled back first.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            try:
                return func(self, *args, **kwargs)
            except Exception as exc:
                db = getattr(self, "db", None)
                if db is not None:
                    db.rollback()

                if isinstance(exc, AppError):
                    error = exc
                elif isinstance(exc, SQLAlchemyError):
                    error = parse_db_error(exc, operation, resource)
                else:
                    error = operation_failure(operation, resource, str(exc))
                    if user_message:
                        error.user_message = user_message

                log_error(error, operation=operation, resource=resource)
                if error is exc:
                    raise
                raise error from exc

        return wrapper  # type: ignore[return-value]

    return decorator
