"""
Typed errors raised by the booking engine and services.

Each error carries the HTTP status it maps to at the API boundary, so the
exception handler in main.py can translate without inspecting types.
"""

from fastapi import status


class BookingError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Malformed, missing or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(BookingError):
    """Missing or invalid credential."""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(BookingError):
    """Valid credential, insufficient role."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BookingError):
    """Only raised when a strict workflow mode is enabled."""
    status_code = status.HTTP_409_CONFLICT


class UpstreamError(BookingError):
    """Key-value store or identity backend failure. Never retried."""
    status_code = status.HTTP_502_BAD_GATEWAY
