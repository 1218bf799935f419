"""Booking creation workflow.

Linear, one coroutine per request:

  RESOLVING_EVENT → RESOLVING_TOKEN → CREATING_CALENDAR_EVENT → PERSISTING → DONE

Every state can exit to FAILED.  Collaborators report classified failures as
tagged results; anything they raise instead, and any store failure, is caught
by the outermost handler.  ``create_booking`` always returns a BookingResult.

No rollback: if the insert fails after the Google event was created, the
remote event stays.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from bookings.auth.base import (
    AuthTokenProvider,
    TokenFailure,
    TokenFailureKind,
)
from bookings.calendar_providers.base import (
    CalendarEvent,
    CalendarFailure,
    CalendarFailureKind,
    CalendarService,
)
from bookings.errors import CalendarEventError, ErrorCode
from bookings.models import BookingRequest, BookingResult, NewBooking
from bookings.store.base import BookingStore

log = logging.getLogger("bookings.workflow")

EVENT_NOT_FOUND = "Event not found"
CALENDAR_ACCESS_EXPIRED = "Google Calendar access expired"
CALENDAR_EVENT_FAILED = "Failed to create Google Calendar event"
BOOKING_FAILED = "Failed to create booking"

# TokenFailureKind → (code, message, requires_reauth)
_TOKEN_FAILURES: dict[TokenFailureKind, tuple[ErrorCode, str, bool]] = {
    TokenFailureKind.NO_CONNECTION: (
        ErrorCode.NO_GOOGLE_CONNECTION,
        "Google Calendar not connected",
        False,
    ),
    TokenFailureKind.RETRIEVAL_ERROR: (
        ErrorCode.GOOGLE_AUTH_REQUIRED,
        "Please reconnect your Google Calendar",
        True,
    ),
    TokenFailureKind.OTHER: (
        ErrorCode.GOOGLE_AUTH_ERROR,
        "Failed to access Google Calendar",
        False,
    ),
}


class BookingState(str, Enum):
    RESOLVING_EVENT = "resolving_event"
    RESOLVING_TOKEN = "resolving_token"
    CREATING_CALENDAR_EVENT = "creating_calendar_event"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class BookingCreationWorkflow:
    """Books a slot on an event and mirrors it onto the owner's Google Calendar."""

    def __init__(
        self,
        store: BookingStore,
        auth: AuthTokenProvider,
        calendar: CalendarService,
    ) -> None:
        self._store = store
        self._auth = auth
        self._calendar = calendar

    async def create_booking(
        self, booking_data: BookingRequest | Mapping[str, Any]
    ) -> BookingResult:
        try:
            return await self._run(booking_data)
        except Exception as exc:
            log.exception("Error creating booking")
            _enter(BookingState.FAILED)
            return BookingResult.failure(BOOKING_FAILED, details=str(exc))

    async def _run(self, booking_data: BookingRequest | Mapping[str, Any]) -> BookingResult:
        request = (
            booking_data
            if isinstance(booking_data, BookingRequest)
            else BookingRequest.model_validate(booking_data)
        )

        _enter(BookingState.RESOLVING_EVENT, request.event_id)
        event = await self._store.find_event_with_owner(request.event_id)
        if event is None:
            _enter(BookingState.FAILED, request.event_id)
            return BookingResult.failure(EVENT_NOT_FOUND)

        _enter(BookingState.RESOLVING_TOKEN, request.event_id)
        token_result = await self._auth.get_token(event.owner.clerk_user_id)
        if isinstance(token_result, TokenFailure):
            code, message, requires_reauth = _TOKEN_FAILURES[token_result.kind]
            log.warning(
                "No Google token for owner of event %s: %s", event.id, code.value
            )
            _enter(BookingState.FAILED, request.event_id)
            return BookingResult.failure(
                message, code=code, requires_reauth=requires_reauth
            )

        _enter(BookingState.CREATING_CALENDAR_EVENT, request.event_id)
        calendar_result = await self._calendar.create_event(
            token_result.token,
            CalendarEvent(
                summary=f"{request.name} - {event.title}",
                description=request.additional_info or "",
                start=request.start_time,
                end=request.end_time,
                attendees=[request.email, event.owner.email],
                correlation_seed=event.id,
            ),
        )
        if isinstance(calendar_result, CalendarFailure):
            if calendar_result.kind is CalendarFailureKind.UNAUTHORIZED:
                _enter(BookingState.FAILED, request.event_id)
                return BookingResult.failure(
                    CALENDAR_ACCESS_EXPIRED,
                    code=ErrorCode.GOOGLE_TOKEN_EXPIRED,
                    requires_reauth=True,
                )
            raise CalendarEventError(CALENDAR_EVENT_FAILED)

        _enter(BookingState.PERSISTING, request.event_id)
        booking = await self._store.insert_booking(
            NewBooking(
                event_id=event.id,
                user_id=event.user_id,
                name=request.name,
                email=request.email,
                start_time=request.start_time,
                end_time=request.end_time,
                additional_info=request.additional_info,
                meet_link=calendar_result.meet_link,
                google_event_id=calendar_result.google_event_id,
            )
        )

        _enter(BookingState.DONE, request.event_id)
        log.info("Booking %s created for event %s", booking.id, event.id)
        return BookingResult(
            success=True, booking=booking, meet_link=calendar_result.meet_link
        )


def _enter(state: BookingState, event_id: str = "") -> None:
    log.debug("booking[%s] → %s", event_id, state.value)
