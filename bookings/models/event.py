"""Bookable event types and the users who own them."""

from typing import Optional

from pydantic import BaseModel


class EventOwner(BaseModel):
    """The user whose calendar receives bookings for an event."""

    id: str
    clerk_user_id: str  # external identity used to fetch the Google token
    email: str
    name: Optional[str] = None


class SchedulingEvent(BaseModel):
    """A bookable event type, joined with its owner at read time."""

    id: str
    title: str
    user_id: str
    owner: EventOwner
