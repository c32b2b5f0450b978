"""Domain error taxonomy.

Every workflow operation fails fast with the most specific subclass; the
exception handlers in ``backend.condo.main`` turn them into
``{"success": false, "error": ...}`` bodies with the matching status code.
"""

from fastapi import status


class CondoError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(CondoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class InvalidToken(CondoError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class InvalidCredentials(CondoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid apartment or password"


class Forbidden(CondoError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(CondoError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ValidationError(CondoError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class SlotConflict(CondoError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Space already booked for this date"


class InvalidTransition(CondoError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Status change not allowed"


class InvalidRecipient(CondoError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You cannot send messages to yourself"


class RateLimited(CondoError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many attempts, try again later"

    def __init__(self, retry_after: int, message: str | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after
