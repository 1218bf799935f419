"""Error codes returned to callers and the service's exception hierarchy."""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable failure codes carried in a BookingResult."""

    NO_GOOGLE_CONNECTION = "NO_GOOGLE_CONNECTION"
    GOOGLE_AUTH_REQUIRED = "GOOGLE_AUTH_REQUIRED"
    GOOGLE_AUTH_ERROR = "GOOGLE_AUTH_ERROR"
    GOOGLE_TOKEN_EXPIRED = "GOOGLE_TOKEN_EXPIRED"


class BookingServiceError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(BookingServiceError):
    """Raised when a collaborator is missing required configuration."""


class CalendarEventError(BookingServiceError):
    """Raised when the calendar API fails for a reason other than authorization."""
