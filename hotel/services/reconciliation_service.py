"""
Сверка статусов номеров и броней с текущей датой.

Один проход: загрузить все номера с бронями, посчитать изменения в памяти,
сохранить одним коммитом.
"""
import logging
from dataclasses import dataclass, asdict
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from hotel.domain.room_status import (
    LIVE_BOOKING_STATUSES,
    derive_status,
    find_active_booking,
    is_manually_managed,
)
from hotel.models import BookingStatus, Room
from hotel.services.room_service import RoomService

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    as_of: date
    rooms_checked: int = 0
    rooms_skipped: int = 0
    rooms_changed: int = 0
    bookings_started: int = 0
    bookings_completed: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.rooms_changed or self.bookings_started or self.bookings_completed)

    def as_dict(self) -> dict:
        return asdict(self)


def reconcile_room(room: Room, as_of: date, result: SweepResult) -> None:
    """Apply one room's status and booking transitions in memory."""
    if is_manually_managed(room.status):
        result.rooms_skipped += 1
        return

    result.rooms_checked += 1
    bookings = room.bookings

    new_status = derive_status(room.status, bookings, as_of)
    if new_status != room.status:
        logger.info(f"Room {room.number}: {room.status.value} -> {new_status.value}")
        room.status = new_status
        result.rooms_changed += 1

    active = find_active_booking(bookings, as_of)
    if active is not None:
        if active.status == BookingStatus.CONFIRMED and active.check_in <= as_of:
            active.status = BookingStatus.IN_PROGRESS
            result.bookings_started += 1
            logger.info(f"Booking #{active.id} -> {BookingStatus.IN_PROGRESS.value}")
        return

    for booking in bookings:
        if booking.status in LIVE_BOOKING_STATUSES and booking.check_out <= as_of:
            booking.status = BookingStatus.COMPLETED
            result.bookings_completed += 1
            logger.info(f"Booking #{booking.id} -> {BookingStatus.COMPLETED.value}")


async def reconcile(db: AsyncSession, as_of: date) -> SweepResult:
    """
    Пересчитать статусы всех номеров на дату `as_of`.

    Номера в Maintenance/Cleaning пропускаются целиком. Изменения
    сохраняются одним коммитом в конце прохода.
    """
    result = SweepResult(as_of=as_of)

    rooms = await RoomService.get_rooms_with_bookings(db)
    for room in rooms:
        reconcile_room(room, as_of, result)

    await db.commit()
    return result
