"""Application error hierarchy.

Every error raised on purpose by the service derives from ``AppError`` and
knows the HTTP status it maps to. ``main.py`` renders them as
``{"error": message, "details": {...}}``.
"""
from typing import Any


class AppError(Exception):
    """Base class for client-visible errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidDecimal(AppError):
    """Input could not be parsed as a decimal number."""

    status_code = 400
    default_message = "Invalid decimal value"

    def __init__(self, value: Any, field: str | None = None) -> None:
        self.value = value
        self.field = field
        message = f"Invalid decimal value: {value!r}"
        details = {field: [message]} if field else None
        super().__init__(message, details)


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Validation failed"


class Unauthenticated(AppError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Conflict"
