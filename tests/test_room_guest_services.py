"""
Tests for room and guest management
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaValidationError

from hotel.core.exceptions import ConflictError, NotFoundError, ValidationError
from hotel.models import BookingStatus, RoomStatus
from hotel.schemas.guest import GuestCreate, GuestUpdate
from hotel.schemas.room import RoomCreate, RoomUpdate
from hotel.services.guest_service import GuestService
from hotel.services.room_service import RoomService

from conftest import days


def _guest_in(**overrides):
    data = {
        "first_name": "Maria",
        "last_name": "Lopez",
        "email": "maria@example.com",
        "phone": "+15550001111",
        "document_id": "P1234567",
    }
    data.update(overrides)
    return GuestCreate(**data)


class TestRoomSchema:
    def test_room_type_is_normalized(self):
        room_in = RoomCreate(number="501", room_type="  Suite ", price_per_night=Decimal("250"))
        assert room_in.room_type == "suite"

    def test_unknown_room_type_is_accepted(self):
        room_in = RoomCreate(number="502", room_type="Penthouse", price_per_night=Decimal("900"))
        assert room_in.room_type == "penthouse"

    def test_blank_room_type_rejected(self):
        with pytest.raises(SchemaValidationError):
            RoomCreate(number="503", room_type="   ", price_per_night=Decimal("100"))

    def test_price_must_be_positive(self):
        with pytest.raises(SchemaValidationError):
            RoomCreate(number="504", price_per_night=Decimal("0"))


class TestRoomService:
    @pytest.mark.asyncio
    async def test_create_room(self, session):
        room = await RoomService.create_room(
            session, RoomCreate(number="201", room_type="suite", capacity=4, price_per_night=Decimal("250.00"))
        )

        assert room.id is not None
        assert room.status == RoomStatus.AVAILABLE
        assert room.room_type == "suite"

    @pytest.mark.asyncio
    async def test_duplicate_number(self, session, make_room):
        await make_room(number="101")

        with pytest.raises(ValidationError, match="already exists"):
            await RoomService.create_room(
                session, RoomCreate(number="101", price_per_night=Decimal("80.00"))
            )

    @pytest.mark.asyncio
    async def test_rename_to_taken_number(self, session, make_room):
        await make_room(number="101")
        other = await make_room(number="102")

        with pytest.raises(ValidationError, match="already exists"):
            await RoomService.update_room(session, other.id, RoomUpdate(number="101"))

    @pytest.mark.asyncio
    async def test_manual_status_change(self, session, make_room):
        room = await make_room()

        updated = await RoomService.update_room(
            session, room.id, RoomUpdate(status=RoomStatus.MAINTENANCE, price_per_night=Decimal("120.00"))
        )

        assert updated.status == RoomStatus.MAINTENANCE
        assert updated.price_per_night == Decimal("120.00")
        assert updated.number == "101"

    @pytest.mark.asyncio
    async def test_update_missing_room(self, session):
        with pytest.raises(NotFoundError):
            await RoomService.update_room(session, 999, RoomUpdate(capacity=3))

    @pytest.mark.asyncio
    async def test_delete_room_with_live_booking(self, session, make_room, make_guest, make_booking):
        room = await make_room()
        await make_booking(room, await make_guest(), days(1), days(3))

        with pytest.raises(ConflictError):
            await RoomService.delete_room(session, room.id)

    @pytest.mark.asyncio
    async def test_delete_room_with_past_bookings(self, session, make_room, make_guest, make_booking):
        room = await make_room()
        guest = await make_guest()
        await make_booking(room, guest, days(-5), days(-3), status=BookingStatus.COMPLETED)
        await make_booking(room, guest, days(1), days(3), status=BookingStatus.CANCELLED)

        await RoomService.delete_room(session, room.id)

        assert await RoomService.get_room_by_id(session, room.id) is None

    @pytest.mark.asyncio
    async def test_available_rooms_by_stored_status(self, session, make_room):
        await make_room(number="101")
        await make_room(number="102", status=RoomStatus.OCCUPIED)
        await make_room(number="103", status=RoomStatus.CLEANING)

        rooms = await RoomService.get_available_rooms(session)

        assert [r.number for r in rooms] == ["101"]

    @pytest.mark.asyncio
    async def test_free_rooms_for_dates(self, session, make_room, make_guest, make_booking):
        booked = await make_room(number="101")
        await make_room(number="102", status=RoomStatus.MAINTENANCE)
        await make_room(number="103")
        await make_booking(booked, await make_guest(), days(1), days(3))

        overlapping = await RoomService.get_free_rooms(session, days(2), days(4))
        back_to_back = await RoomService.get_free_rooms(session, days(3), days(5))

        assert [r.number for r in overlapping] == ["103"]
        assert [r.number for r in back_to_back] == ["101", "103"]

    @pytest.mark.asyncio
    async def test_free_rooms_bad_range(self, session):
        with pytest.raises(ValidationError):
            await RoomService.get_free_rooms(session, days(3), days(3))


class TestGuestService:
    @pytest.mark.asyncio
    async def test_create_guest(self, session):
        guest = await GuestService.create_guest(session, _guest_in())

        assert guest.id is not None
        assert guest.full_name == "Maria Lopez"
        assert guest.bookings_count == 0
        assert guest.registered_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_document(self, session):
        await GuestService.create_guest(session, _guest_in())

        with pytest.raises(ValidationError, match="document"):
            await GuestService.create_guest(session, _guest_in(email="other@example.com"))

    @pytest.mark.asyncio
    async def test_duplicate_email(self, session):
        await GuestService.create_guest(session, _guest_in())

        with pytest.raises(ValidationError, match="email"):
            await GuestService.create_guest(session, _guest_in(document_id="X999"))

    @pytest.mark.asyncio
    async def test_update_keeps_own_email(self, session):
        guest = await GuestService.create_guest(session, _guest_in())

        updated = await GuestService.update_guest(
            session, guest.id, GuestUpdate(email="maria@example.com", phone="+15550002222")
        )

        assert updated.phone == "+15550002222"

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self, session):
        await GuestService.create_guest(session, _guest_in())
        other = await GuestService.create_guest(
            session, _guest_in(email="juan@example.com", document_id="P7654321")
        )

        with pytest.raises(ValidationError, match="email"):
            await GuestService.update_guest(session, other.id, GuestUpdate(email="maria@example.com"))

    def test_invalid_email_rejected(self):
        with pytest.raises(SchemaValidationError):
            _guest_in(email="not-an-email")

    @pytest.mark.asyncio
    async def test_delete_guest_with_live_booking(self, session, make_room, make_guest, make_booking):
        guest = await make_guest()
        await make_booking(await make_room(), guest, days(1), days(3))

        with pytest.raises(ConflictError):
            await GuestService.delete_guest(session, guest.id)

    @pytest.mark.asyncio
    async def test_delete_guest(self, session):
        guest = await GuestService.create_guest(session, _guest_in())

        await GuestService.delete_guest(session, guest.id)

        assert await GuestService.get_guest_by_id(session, guest.id) is None

    @pytest.mark.asyncio
    async def test_get_missing_guest(self, session):
        with pytest.raises(NotFoundError):
            await GuestService.get_guest_or_raise(session, 999)
