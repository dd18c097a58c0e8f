"""
Вычисление статуса номера по его броням.

Используется периодической сверкой, созданием, изменением и отменой брони.
"""
from datetime import date
from typing import Iterable, Optional

from hotel.models import BookingStatus, RoomStatus

# Статусы, которыми управляет только администратор
MANUAL_ROOM_STATUSES = frozenset({RoomStatus.MAINTENANCE, RoomStatus.CLEANING})

LIVE_BOOKING_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS})


def is_active_on(booking, as_of: date) -> bool:
    """Live booking whose stay covers `as_of` (check-out day excluded)."""
    return (
        booking.status in LIVE_BOOKING_STATUSES
        and booking.check_in <= as_of < booking.check_out
    )


def find_active_booking(bookings: Iterable, as_of: date):
    """Earliest-starting booking active on `as_of`, or None."""
    active = [b for b in bookings if is_active_on(b, as_of)]
    if not active:
        return None
    return min(active, key=lambda b: (b.check_in, b.id or 0))


def is_manually_managed(status: RoomStatus) -> bool:
    return status in MANUAL_ROOM_STATUSES


def derive_status(
    current: RoomStatus, bookings: Iterable, as_of: date
) -> RoomStatus:
    """
    Какой статус должен быть у номера на дату `as_of`.

    Maintenance/Cleaning возвращаются как есть. Иначе Occupied, если есть
    активная на эту дату бронь, и Available, если нет.
    """
    if is_manually_managed(current):
        return current
    if find_active_booking(bookings, as_of) is not None:
        return RoomStatus.OCCUPIED
    return RoomStatus.AVAILABLE


def initial_booking_status(check_in: date, today: date) -> BookingStatus:
    if check_in <= today:
        return BookingStatus.IN_PROGRESS
    return BookingStatus.CONFIRMED


def status_from_dates(
    check_in: date, check_out: date, today: date
) -> BookingStatus:
    """Status a live booking should have given its dates relative to today."""
    if check_in <= today < check_out:
        return BookingStatus.IN_PROGRESS
    if check_out <= today:
        return BookingStatus.COMPLETED
    return BookingStatus.CONFIRMED


def apply_derived_status(room, bookings: Iterable, as_of: date) -> Optional[RoomStatus]:
    """Sets room.status from its bookings. Returns the previous status if it changed."""
    new_status = derive_status(room.status, bookings, as_of)
    if new_status == room.status:
        return None
    old_status = room.status
    room.status = new_status
    return old_status
