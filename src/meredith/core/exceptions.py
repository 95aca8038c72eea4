"""Domain exceptions raised by Meredith services.

Services raise these before touching the database; the HTTP layer maps them
to status codes. Infrastructure errors (SQLAlchemy, I/O) are never wrapped.
"""

from typing import Any


class MeredithError(Exception):
    """Base class for domain errors with an HTTP status and an error code."""

    status_code: int = 500
    code: str = "MEREDITH_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to an API response body."""
        result: dict[str, Any] = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class RecordNotFoundError(MeredithError):
    """Raised when a referenced or requested record does not exist."""

    status_code = 404
    code = "RECORD_NOT_FOUND"


class InvalidActionError(MeredithError):
    """Raised when input fails semantic validation."""

    status_code = 400
    code = "INVALID_ACTION"
