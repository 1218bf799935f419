"""Data models for the booking layer."""

from .booking import Booking, BookingRequest, BookingResult, NewBooking
from .event import EventOwner, SchedulingEvent

__all__ = [
    "Booking",
    "BookingRequest",
    "BookingResult",
    "EventOwner",
    "NewBooking",
    "SchedulingEvent",
]
