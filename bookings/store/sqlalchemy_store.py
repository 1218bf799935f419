"""BookingStore on SQLAlchemy's async ORM (SQLite via aiosqlite, Postgres via asyncpg)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import selectinload

from bookings.config import settings
from bookings.models import Booking, EventOwner, NewBooking, SchedulingEvent

from .base import BookingStore
from .orm import Base, BookingRow, Event

logger = logging.getLogger(__name__)


class SQLAlchemyBookingStore(BookingStore):
    """BookingStore backed by a relational database."""

    def __init__(
        self,
        database_url: str | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._engine = engine or create_async_engine(
            database_url or settings.database_url, echo=False
        )
        self._session = async_sessionmaker(
            self._engine, expire_on_commit=False, class_=AsyncSession
        )

    async def init_schema(self) -> None:
        """Create any missing tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    async def find_event_with_owner(self, event_id: str) -> Optional[SchedulingEvent]:
        async with self._session() as session:
            result = await session.execute(
                select(Event)
                .where(Event.id == event_id)
                .options(selectinload(Event.user))
            )
            event = result.scalar_one_or_none()

        if event is None:
            return None

        return SchedulingEvent(
            id=event.id,
            title=event.title,
            user_id=event.user_id,
            owner=EventOwner(
                id=event.user.id,
                clerk_user_id=event.user.clerk_user_id,
                email=event.user.email,
                name=event.user.name,
            ),
        )

    async def insert_booking(self, fields: NewBooking) -> Booking:
        values = fields.model_dump()
        values["start_time"] = _as_utc(fields.start_time)
        values["end_time"] = _as_utc(fields.end_time)
        row = BookingRow(**values)
        async with self._session() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)

        logger.info("Stored booking %s for event %s", row.id, row.event_id)
        return _to_booking(row)


def _to_booking(row: BookingRow) -> Booking:
    return Booking(
        id=row.id,
        event_id=row.event_id,
        user_id=row.user_id,
        name=row.name,
        email=row.email,
        start_time=_as_utc(row.start_time),
        end_time=_as_utc(row.end_time),
        additional_info=row.additional_info,
        meet_link=row.meet_link,
        google_event_id=row.google_event_id,
        created_at=_as_utc(row.created_at) if row.created_at else None,
    )


def _as_utc(dt: datetime) -> datetime:
    """Times are stored as UTC; SQLite drops the offset, so naive values read back are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
