"""Abstract base class for booking persistence."""

from abc import ABC, abstractmethod
from typing import Optional

from bookings.models import Booking, NewBooking, SchedulingEvent


class BookingStore(ABC):
    """Reads event metadata and writes booking records."""

    @abstractmethod
    async def find_event_with_owner(self, event_id: str) -> Optional[SchedulingEvent]:
        """Return the event joined with its owner, or ``None`` if it does not exist."""

    @abstractmethod
    async def insert_booking(self, fields: NewBooking) -> Booking:
        """Insert a booking row and return it as stored."""
