"""Booking persistence."""

from .base import BookingStore

__all__ = ["BookingStore"]
