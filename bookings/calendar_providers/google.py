"""Google Calendar service implementation.

Events are created on the event owner's calendar with the owner's own OAuth
access token (obtained from the auth provider on every booking), so a
Calendar API client is built per call rather than once per process.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from functools import partial
from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from bookings.config import settings

from .base import (
    CalendarEvent,
    CalendarEventCreated,
    CalendarFailure,
    CalendarFailureKind,
    CalendarResult,
    CalendarService,
)

logger = logging.getLogger(__name__)


class GoogleCalendarService(CalendarService):
    """CalendarService backed by Google Calendar API v3."""

    def __init__(self, calendar_id: str | None = None) -> None:
        self._calendar_id = calendar_id or settings.google_calendar_id

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_in_executor(self, func, *args, **kwargs) -> Any:
        """Run a synchronous Google API call in the default thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, partial(func, *args, **kwargs)
        )

    @staticmethod
    def _to_rfc3339(dt: datetime) -> str:
        """Convert a datetime to an RFC 3339 string with timezone."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.isoformat()

    @staticmethod
    def _build_service(token: str) -> Any:
        credentials = Credentials(token=token)
        return build(
            "calendar", "v3", credentials=credentials, cache_discovery=False
        )

    @staticmethod
    def conference_request_id(seed: str) -> str:
        """Request id asking Google to allocate one Meet link for this insert."""
        return f"{seed}-{int(time.time() * 1000)}"

    # ------------------------------------------------------------------
    # CalendarService interface
    # ------------------------------------------------------------------

    async def create_event(self, token: str, event: CalendarEvent) -> CalendarResult:
        """Insert an event with a Google Meet link into the owner's calendar."""
        body: dict[str, Any] = {
            "summary": event.summary,
            "description": event.description,
            "start": {"dateTime": self._to_rfc3339(event.start)},
            "end": {"dateTime": self._to_rfc3339(event.end)},
            "attendees": [{"email": addr} for addr in event.attendees],
            "conferenceData": {
                "createRequest": {
                    "requestId": self.conference_request_id(event.correlation_seed)
                },
            },
        }

        try:
            service = self._build_service(token)
            result = await self._run_in_executor(
                service.events()
                .insert(
                    calendarId=self._calendar_id,
                    body=body,
                    conferenceDataVersion=1,
                )
                .execute
            )
        except HttpError as exc:
            if exc.resp.status == 401:
                logger.warning("Google rejected the access token (401)")
                return CalendarFailure(
                    CalendarFailureKind.UNAUTHORIZED, "Google Calendar access expired"
                )
            logger.exception("Google Calendar insert failed")
            return CalendarFailure(CalendarFailureKind.OTHER, str(exc))
        except Exception as exc:
            logger.exception("Google Calendar insert failed")
            return CalendarFailure(CalendarFailureKind.OTHER, str(exc))

        logger.info(
            "Created event %s on calendar %s", result["id"], self._calendar_id
        )

        return CalendarEventCreated(
            meet_link=result.get("hangoutLink"),
            google_event_id=result["id"],
        )
