"""Pydantic models for booking requests, stored bookings and results."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bookings.errors import ErrorCode

# Callers speak camelCase (``eventId``, ``startTime``); Python code uses
# snake_case.  Both are accepted on input.
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingRequest(BaseModel):
    """Data submitted by the person booking a slot on an event."""

    model_config = _CAMEL

    event_id: str
    name: str
    email: str
    start_time: datetime
    end_time: datetime
    additional_info: Optional[str] = None


class NewBooking(BaseModel):
    """Column values for a booking row that has not been inserted yet."""

    event_id: str
    user_id: str
    name: str
    email: str
    start_time: datetime
    end_time: datetime
    additional_info: Optional[str] = None
    meet_link: Optional[str] = None
    google_event_id: str


class Booking(NewBooking):
    """A persisted booking."""

    model_config = _CAMEL

    id: str
    created_at: Optional[datetime] = None


class BookingResult(BaseModel):
    """Outcome of a booking attempt.  Failures never raise; they land here."""

    model_config = _CAMEL

    success: bool
    error: Optional[str] = None
    code: Optional[ErrorCode] = None
    requires_reauth: Optional[bool] = None
    details: Optional[str] = None
    booking: Optional[Booking] = None
    meet_link: Optional[str] = None

    @classmethod
    def failure(
        cls,
        error: str,
        code: ErrorCode | None = None,
        requires_reauth: bool | None = None,
        details: str | None = None,
    ) -> "BookingResult":
        return cls(
            success=False,
            error=error,
            code=code,
            requires_reauth=requires_reauth,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain result object with camelCase keys and unset fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
