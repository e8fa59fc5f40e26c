from typing import Any, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message, sent to clients as ``error``
        details: optional extra context (field errors, constraint info),
            sent only when the app exposes error details
        http_status: HTTP status code used by the exception handlers
    """

    http_status = 500
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    ``details`` is the ordered list of ``"{field}: {message}"`` strings.
    """

    http_status = 400
    default_message = "Validation failed"


class NotFoundError(ServiceError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised when a write violates a uniqueness or referential constraint."""

    http_status = 409
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    """Raised when no valid session accompanies the request."""

    http_status = 401
    default_message = "Unauthorized"
