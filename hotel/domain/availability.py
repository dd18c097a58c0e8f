"""
Проверка пересечения дат бронирования.

Интервалы полуоткрытые: [check_in, check_out). День выезда одного гостя
свободен для заезда следующего.
"""
from datetime import date
from typing import Iterable, Optional

from hotel.models import BookingStatus

# Брони в этих статусах не занимают номер
NON_BLOCKING_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})


def dates_conflict(
    check_in: date, check_out: date, existing_in: date, existing_out: date
) -> bool:
    """True if [check_in, check_out) collides with [existing_in, existing_out)."""
    starts_inside = existing_in <= check_in < existing_out
    ends_inside = existing_in < check_out <= existing_out
    covers_existing = check_in <= existing_in and check_out >= existing_out
    return starts_inside or ends_inside or covers_existing


def blocks_room(booking) -> bool:
    return booking.status not in NON_BLOCKING_STATUSES


def find_conflicts(
    bookings: Iterable,
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[int] = None,
) -> list:
    """Bookings that would collide with the requested range."""
    return [
        b
        for b in bookings
        if blocks_room(b)
        and (exclude_booking_id is None or b.id != exclude_booking_id)
        and dates_conflict(check_in, check_out, b.check_in, b.check_out)
    ]


def is_available(
    bookings: Iterable,
    check_in: date,
    check_out: date,
    exclude_booking_id: Optional[int] = None,
) -> bool:
    return not find_conflicts(bookings, check_in, check_out, exclude_booking_id)
