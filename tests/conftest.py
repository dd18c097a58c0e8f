"""
Pytest configuration for hotel tests
"""
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure hotel is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from hotel.database import Base  # noqa: E402
from hotel.models import Booking, BookingStatus, Guest, Room, RoomStatus  # noqa: E402

TODAY = date(2026, 3, 10)


def days(n: int) -> date:
    """TODAY shifted by n days"""
    return TODAY + timedelta(days=n)


@pytest.fixture
def today():
    return TODAY


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_room(session):
    async def _make_room(
        number: str = "101",
        capacity: int = 2,
        price: Decimal = Decimal("100.00"),
        status: RoomStatus = RoomStatus.AVAILABLE,
        room_type: str = "double",
    ) -> Room:
        room = Room(
            number=number,
            room_type=room_type,
            capacity=capacity,
            price_per_night=price,
            status=status,
        )
        session.add(room)
        await session.commit()
        return room

    return _make_room


@pytest.fixture
def make_guest(session):
    counter = {"n": 0}

    async def _make_guest(first_name: str = "Test", last_name: str = "Guest") -> Guest:
        counter["n"] += 1
        n = counter["n"]
        guest = Guest(
            first_name=first_name,
            last_name=last_name,
            email=f"guest{n}@example.com",
            phone=f"+1555000{n:04d}",
            document_id=f"DOC-{n:04d}",
        )
        session.add(guest)
        await session.commit()
        return guest

    return _make_guest


@pytest.fixture
def make_booking(session):
    """Books directly through the ORM, bypassing the service rules."""

    async def _make_booking(
        room: Room,
        guest: Guest,
        check_in: date,
        check_out: date,
        status: BookingStatus = BookingStatus.CONFIRMED,
        guests_count: int = 1,
    ) -> Booking:
        booking = Booking(
            room=room,
            guest=guest,
            check_in=check_in,
            check_out=check_out,
            guests_count=guests_count,
            total_amount=(check_out - check_in).days * room.price_per_night,
            status=status,
        )
        session.add(booking)
        await session.commit()
        return booking

    return _make_booking
