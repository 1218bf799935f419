"""Abstract base class for calendar services.

Defines the interface for creating a conferencing-enabled event on the
event owner's calendar using a delegated access token.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union


@dataclass
class CalendarEvent:
    """Represents a calendar event to be created."""

    summary: str
    start: datetime
    end: datetime
    description: str = ""
    attendees: list[str] = field(default_factory=list)  # email addresses
    # Combined with a timestamp to form the conference create-request id.
    correlation_seed: str = ""


class CalendarFailureKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    OTHER = "other"


@dataclass(frozen=True)
class CalendarEventCreated:
    meet_link: str | None
    google_event_id: str


@dataclass(frozen=True)
class CalendarFailure:
    kind: CalendarFailureKind
    message: str = ""


CalendarResult = Union[CalendarEventCreated, CalendarFailure]


class CalendarService(ABC):
    """Abstract calendar backend."""

    @abstractmethod
    async def create_event(self, token: str, event: CalendarEvent) -> CalendarResult:
        """Create a calendar event with a video-conferencing link.

        Args:
            token: OAuth access token for the calendar owner.
            event: Event details.

        Returns:
            ``CalendarEventCreated`` carrying the meeting link and remote
            event id, or ``CalendarFailure``.
        """
