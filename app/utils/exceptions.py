"""Custom exceptions and error handling utilities."""
from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class AppException(Exception):
    """Base exception for application errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when request input is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidCredentialsError(AppException):
    """Raised when a password does not match the stored hash."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class BlockedError(AppException):
    """Raised when a blocked account tries to log in or act on others."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Your account is blocked."


class NotFoundError(AppException):
    """Raised when a referenced user does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found."


class ConflictError(AppException):
    """Raised when a unique constraint (the email) is violated."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class StoreError(AppException):
    """Raised when the database fails for any other reason."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        super().__init__(message)
        self.detail = detail


def handle_database_error(error: SQLAlchemyError, operation: str) -> AppException:
    """
    Convert database errors to application exceptions.

    Args:
        error: The database error
        operation: Description of the operation that failed

    Returns:
        ConflictError for uniqueness violations, StoreError otherwise
    """
    if isinstance(error, IntegrityError):
        error_message = str(error.orig).lower()
        if "duplicate" in error_message or "unique" in error_message:
            return ConflictError()

    return StoreError(
        f"Database error during {operation}",
        detail=str(getattr(error, "orig", None) or error),
    )


def describe_validation_errors(errors: list[dict]) -> str:
    """
    Build a human-readable message from Pydantic request validation errors.

    Args:
        errors: Errors as returned by RequestValidationError.errors()

    Returns:
        Message describing the first offending field
    """
    if not errors:
        return "Invalid request"

    error = errors[0]
    loc = [part for part in error.get("loc", ()) if part != "body"]
    if not loc:
        return "Request body required"

    field = str(loc[0])
    if error.get("type") in ("missing", "too_short", "string_too_short") or error.get("input") is None:
        return f"{field.capitalize()} required"
    return f"Invalid {field}: {error.get('msg', 'invalid value')}"
