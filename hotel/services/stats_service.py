from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from hotel.domain.room_status import LIVE_BOOKING_STATUSES, find_active_booking
from hotel.models import RoomStatus
from hotel.services.room_service import RoomService


class StatsService:
    @staticmethod
    async def occupancy(db: AsyncSession, as_of: date) -> dict:
        """Загрузка отеля на дату: номера по статусам и активные брони."""
        rooms = await RoomService.get_rooms_with_bookings(db)

        by_status = {status.value: 0 for status in RoomStatus}
        in_use = 0
        active_bookings = 0
        for room in rooms:
            by_status[room.status.value] += 1
            if find_active_booking(room.bookings, as_of) is not None:
                in_use += 1
            active_bookings += sum(
                1 for b in room.bookings if b.status in LIVE_BOOKING_STATUSES
            )

        total = len(rooms)
        return {
            "as_of": as_of,
            "total_rooms": total,
            "rooms_by_status": by_status,
            "rooms_in_use_today": in_use,
            "occupancy_percent": round(in_use * 100 / total) if total else 0,
            "active_bookings": active_bookings,
        }
