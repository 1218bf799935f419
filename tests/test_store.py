"""Tests for the SQLAlchemy booking store (SQLite via aiosqlite)."""

from datetime import datetime, timedelta, timezone

import pytest

from bookings.models import NewBooking
from bookings.store.orm import Event, User
from bookings.store.sqlalchemy_store import SQLAlchemyBookingStore


@pytest.fixture
async def store(tmp_path):
    store = SQLAlchemyBookingStore(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    await store.init_schema()
    async with store._session() as session:
        owner = User(
            id="U1", clerk_user_id="user_clerk_1", email="owner@example.com", name="Olive"
        )
        session.add(owner)
        session.add(Event(id="E1", title="Intro Call", user=owner))
        await session.commit()
    yield store
    await store.dispose()


def _new_booking(**overrides) -> NewBooking:
    fields = dict(
        event_id="E1",
        user_id="U1",
        name="Ada",
        email="ada@example.com",
        start_time=datetime(2026, 3, 15, 14, 0, tzinfo=timezone.utc),
        end_time=datetime(2026, 3, 15, 14, 30, tzinfo=timezone.utc),
        additional_info="Discuss roadmap",
        meet_link="https://meet/x",
        google_event_id="G1",
    )
    fields.update(overrides)
    return NewBooking(**fields)


class TestFindEventWithOwner:
    async def test_joins_owner(self, store):
        event = await store.find_event_with_owner("E1")

        assert event is not None
        assert event.title == "Intro Call"
        assert event.user_id == "U1"
        assert event.owner.clerk_user_id == "user_clerk_1"
        assert event.owner.email == "owner@example.com"
        assert event.owner.name == "Olive"

    async def test_missing_event(self, store):
        assert await store.find_event_with_owner("E2") is None


class TestInsertBooking:
    async def test_returns_stored_booking(self, store):
        booking = await store.insert_booking(_new_booking())

        assert booking.id
        assert booking.event_id == "E1"
        assert booking.user_id == "U1"
        assert booking.meet_link == "https://meet/x"
        assert booking.google_event_id == "G1"
        assert booking.additional_info == "Discuss roadmap"
        assert booking.start_time == datetime(2026, 3, 15, 14, 0, tzinfo=timezone.utc)

    async def test_duplicates_are_allowed(self, store):
        first = await store.insert_booking(_new_booking())
        second = await store.insert_booking(_new_booking(google_event_id="G2"))

        assert first.id != second.id

    async def test_optional_fields(self, store):
        booking = await store.insert_booking(
            _new_booking(additional_info=None, meet_link=None)
        )

        assert booking.additional_info is None
        assert booking.meet_link is None

    async def test_offsets_survive_round_trip(self, store):
        plus_two = timezone(timedelta(hours=2))
        start = datetime(2026, 3, 15, 14, 0, tzinfo=plus_two)
        end = datetime(2026, 3, 15, 14, 30, tzinfo=plus_two)

        booking = await store.insert_booking(_new_booking(start_time=start, end_time=end))

        assert booking.start_time == start
        assert booking.end_time == end
        assert booking.start_time.utcoffset() == timedelta(0)
        assert booking.start_time.hour == 12
