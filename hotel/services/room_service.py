import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel.core.exceptions import ConflictError, NotFoundError, ValidationError
from hotel.domain.availability import is_available
from hotel.domain.room_status import LIVE_BOOKING_STATUSES, is_manually_managed
from hotel.models import Booking, Room, RoomStatus
from hotel.schemas.room import RoomCreate, RoomUpdate

logger = logging.getLogger(__name__)


class RoomService:
    @staticmethod
    async def get_all_rooms(db: AsyncSession) -> List[Room]:
        result = await db.execute(select(Room).order_by(Room.number))
        return list(result.scalars().all())

    @staticmethod
    async def get_room_by_id(
        db: AsyncSession, room_id: int, with_bookings: bool = False
    ) -> Optional[Room]:
        stmt = select(Room).where(Room.id == room_id)
        if with_bookings:
            stmt = stmt.options(selectinload(Room.bookings))
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_room_or_raise(
        db: AsyncSession, room_id: int, with_bookings: bool = False
    ) -> Room:
        room = await RoomService.get_room_by_id(db, room_id, with_bookings)
        if not room:
            raise NotFoundError(f"Room {room_id} not found")
        return room

    @staticmethod
    async def get_rooms_with_bookings(db: AsyncSession) -> List[Room]:
        result = await db.execute(
            select(Room).options(selectinload(Room.bookings)).order_by(Room.number)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_available_rooms(db: AsyncSession) -> List[Room]:
        """Rooms whose stored status is Available right now."""
        result = await db.execute(
            select(Room).where(Room.status == RoomStatus.AVAILABLE).order_by(Room.number)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_free_rooms(
        db: AsyncSession,
        check_in: date,
        check_out: date,
        skip_manual_statuses: bool = True,
    ) -> List[Room]:
        """Rooms without conflicting bookings for [check_in, check_out)."""
        if check_out <= check_in:
            raise ValidationError("check_out must be after check_in")

        rooms = await RoomService.get_rooms_with_bookings(db)
        return [
            room
            for room in rooms
            if not (skip_manual_statuses and is_manually_managed(room.status))
            and is_available(room.bookings, check_in, check_out)
        ]

    @staticmethod
    async def number_exists(
        db: AsyncSession, number: str, exclude_room_id: Optional[int] = None
    ) -> bool:
        stmt = select(Room.id).where(Room.number == number)
        if exclude_room_id is not None:
            stmt = stmt.where(Room.id != exclude_room_id)
        result = await db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def create_room(db: AsyncSession, room_in: RoomCreate) -> Room:
        if await RoomService.number_exists(db, room_in.number):
            raise ValidationError(f"Room number {room_in.number} already exists")

        db_room = Room(**room_in.model_dump(), status=RoomStatus.AVAILABLE)
        db.add(db_room)
        await db.commit()
        await db.refresh(db_room)
        logger.info(f"Room {db_room.number} created (id={db_room.id})")
        return db_room

    @staticmethod
    async def update_room(db: AsyncSession, room_id: int, room_in: RoomUpdate) -> Room:
        db_room = await RoomService.get_room_or_raise(db, room_id)

        # model_dump(exclude_unset=True): только переданные поля
        update_data = room_in.model_dump(exclude_unset=True, exclude_none=True)

        new_number = update_data.get("number")
        if new_number and new_number != db_room.number:
            if await RoomService.number_exists(db, new_number, exclude_room_id=room_id):
                raise ValidationError(f"Room number {new_number} already exists")

        if "status" in update_data and update_data["status"] != db_room.status:
            logger.info(
                f"Room {db_room.number}: status set manually "
                f"{db_room.status.value} -> {update_data['status'].value}"
            )

        for key, value in update_data.items():
            setattr(db_room, key, value)

        await db.commit()
        await db.refresh(db_room)
        return db_room

    @staticmethod
    async def delete_room(db: AsyncSession, room_id: int) -> None:
        db_room = await RoomService.get_room_or_raise(db, room_id, with_bookings=True)

        if any(b.status in LIVE_BOOKING_STATUSES for b in db_room.bookings):
            logger.warning(f"Refusing to delete room {db_room.number}: active bookings")
            raise ConflictError("Cannot delete a room with active bookings")

        await db.delete(db_room)
        await db.commit()
        logger.info(f"Room {db_room.number} deleted")

    @staticmethod
    async def get_live_bookings(db: AsyncSession, room_id: int) -> List[Booking]:
        """Bookings of the room that still hold it (not cancelled, not completed)."""
        result = await db.execute(
            select(Booking).where(
                Booking.room_id == room_id,
                Booking.status.in_(list(LIVE_BOOKING_STATUSES)),
            )
        )
        return list(result.scalars().all())
