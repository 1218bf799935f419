"""Calendar service abstractions and implementations."""

from .base import (
    CalendarEvent,
    CalendarEventCreated,
    CalendarFailure,
    CalendarFailureKind,
    CalendarResult,
    CalendarService,
)

__all__ = [
    "CalendarEvent",
    "CalendarEventCreated",
    "CalendarFailure",
    "CalendarFailureKind",
    "CalendarResult",
    "CalendarService",
]
