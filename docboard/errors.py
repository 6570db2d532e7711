"""Application error taxonomy.

Services raise these; the API layer renders them with the matching HTTP status.
"""

from fastapi import status


class DocboardError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DocboardError):
    """Malformed, missing or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, errors: list[dict[str, str]] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build an error carrying a single field-level detail."""
        return cls(errors=[{"field": field, "message": message}])


class Unauthenticated(DocboardError):
    """No valid identity: token missing, invalid, expired, or user gone."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(DocboardError):
    """Authenticated, but the role or ownership does not allow the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(DocboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(DocboardError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(DocboardError):
    """Storage or unexpected failure. The message never carries internals."""
