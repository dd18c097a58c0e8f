import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel.core.config import settings
from hotel.core.exceptions import (
    IllegalTransitionError,
    NotFoundError,
    ValidationError,
)
from hotel.domain.availability import is_available
from hotel.domain.booking_state import can_transition
from hotel.domain.room_status import (
    apply_derived_status,
    initial_booking_status,
    is_manually_managed,
    status_from_dates,
)
from hotel.models import Booking, BookingStatus, Guest, Room
from hotel.schemas.booking import BookingCreate, BookingUpdate
from hotel.services.room_service import RoomService

logger = logging.getLogger(__name__)


class BookingService:
    """Сервис бизнес-логики для бронирований"""

    @staticmethod
    async def check_availability(
        db: AsyncSession,
        room_id: int,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[int] = None,
        check_room_status: Optional[bool] = None,
    ) -> bool:
        """
        Проверка доступности дат.
        Возвращает True если номер свободен на [check_in, check_out).
        """
        if check_out <= check_in:
            raise ValidationError("Check-out date must be after check-in date")

        room =await RoomService.get_room_by_id(db, room_id)
        if not room:
            return False

        if check_room_status is None:
            check_room_status = settings.availability_checks_room_status
        if check_room_status and is_manually_managed(room.status):
            return False

        bookings = await RoomService.get_live_bookings(db, room_id)
        return is_available(bookings, check_in, check_out, exclude_booking_id)

    @staticmethod
    def _with_relations(stmt):
        return stmt.options(selectinload(Booking.guest), selectinload(Booking.room))

    @staticmethod
    async def get_all_bookings(db: AsyncSession) -> List[Booking]:
        stmt = BookingService._with_relations(
            select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
        """Получить бронь по ID с гостем и номером"""
        stmt = BookingService._with_relations(
            select(Booking).where(Booking.id == booking_id)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_booking_or_raise(db: AsyncSession, booking_id: int) -> Booking:
        booking = await BookingService.get_booking(db, booking_id)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    @staticmethod
    async def get_bookings_by_guest(db: AsyncSession, guest_id: int) -> List[Booking]:
        stmt = BookingService._with_relations(
            select(Booking)
            .where(Booking.guest_id == guest_id)
            .order_by(Booking.check_in.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def _total_for(room: Room, check_in: date, check_out: date):
        nights = (check_out - check_in).days
        return nights * room.price_per_night

    @staticmethod
    async def create_booking(
        db: AsyncSession, booking_in: BookingCreate, today: date
    ) -> Booking:
        """
        Создание новой брони.

        Бронь с заездом сегодня сразу становится IN_PROGRESS, и номер
        помечается занятым, не дожидаясь следующей сверки.
        """
        guest = await db.get(Guest, booking_in.guest_id)
        if not guest:
            raise ValidationError("Guest does not exist")

        room = await RoomService.get_room_by_id(db, booking_in.room_id, with_bookings=True)
        if not room:
            raise ValidationError("Room does not exist")

        if booking_in.check_in >= booking_in.check_out:
            raise ValidationError("Check-out date must be after check-in date")

        if booking_in.check_in < today:
            raise ValidationError("Check-in date cannot be in the past")

        if not await BookingService.check_availability(
            db, room.id, booking_in.check_in, booking_in.check_out
        ):
            logger.warning(
                f"Cannot create booking: dates {booking_in.check_in} - {booking_in.check_out} "
                f"not available for room {room.number}"
            )
            raise ValidationError("Room is not available for the selected dates")

        if booking_in.guests_count > room.capacity:
            raise ValidationError(
                f"Room type {room.room_type} holds at most {room.capacity} guest(s). "
                f"Cannot book {booking_in.guests_count}."
            )

        booking = Booking(
            guest=guest,
            room=room,
            check_in=booking_in.check_in,
            check_out=booking_in.check_out,
            guests_count=booking_in.guests_count,
            total_amount=BookingService._total_for(
                room, booking_in.check_in, booking_in.check_out
            ),
            notes=booking_in.notes,
            status=initial_booking_status(booking_in.check_in, today),
        )
        db.add(booking)

        old_room_status = apply_derived_status(room, room.bookings, today)

        await db.commit()

        logger.info(
            f"Booking #{booking.id} created: room {room.number}, "
            f"{booking.check_in} - {booking.check_out}, status {booking.status.value}"
        )
        if old_room_status is not None:
            logger.info(
                f"Room {room.number}: {old_room_status.value} -> {room.status.value}"
            )
        return booking

    @staticmethod
    async def update_booking(
        db: AsyncSession, booking_id: int, booking_in: BookingUpdate, today: date
    ) -> Booking:
        """Обновление данных брони"""
        booking = await BookingService.get_booking_or_raise(db, booking_id)

        if booking.status == BookingStatus.CANCELLED:
            raise IllegalTransitionError("Cannot modify a cancelled booking")
        if booking.status == BookingStatus.COMPLETED:
            raise IllegalTransitionError("Cannot modify a completed booking")

        update_data = booking_in.model_dump(exclude_unset=True, exclude_none=True)

        new_check_in = update_data.get("check_in", booking.check_in)
        new_check_out = update_data.get("check_out", booking.check_out)
        dates_changed = "check_in" in update_data or "check_out" in update_data

        if new_check_in >= new_check_out:
            raise ValidationError("Check-out date must be after check-in date")

        if dates_changed and not await BookingService.check_availability(
            db, booking.room_id, new_check_in, new_check_out, exclude_booking_id=booking.id
        ):
            raise ValidationError("Room is not available for the new dates")

        room = await RoomService.get_room_or_raise(db, booking.room_id, with_bookings=True)

        guests_count = update_data.get("guests_count")
        if guests_count is not None and guests_count > room.capacity:
            raise ValidationError(
                f"Room type {room.room_type} holds at most {room.capacity} guest(s)."
            )

        requested_status = update_data.get("status")
        if requested_status is not None:
            if not can_transition(booking.status, requested_status):
                raise IllegalTransitionError(
                    f"Cannot change booking status from {booking.status.value} "
                    f"to {requested_status.value}"
                )
            new_status = requested_status
        else:
            new_status = status_from_dates(new_check_in, new_check_out, today)
            if not can_transition(booking.status, new_status):
                raise ValidationError(
                    "A stay already in progress cannot be moved to a future check-in date"
                )

        booking.check_in = new_check_in
        booking.check_out = new_check_out
        if guests_count is not None:
            booking.guests_count = guests_count
        if update_data.get("notes"):
            booking.notes = update_data["notes"]
        if dates_changed:
            booking.total_amount = BookingService._total_for(room, new_check_in, new_check_out)

        if new_status != booking.status:
            logger.info(
                f"Booking #{booking.id}: {booking.status.value} -> {new_status.value}"
            )
            booking.status = new_status

        old_room_status = apply_derived_status(room, room.bookings, today)
        if old_room_status is not None:
            logger.info(
                f"Room {room.number}: {old_room_status.value} -> {room.status.value}"
            )

        await db.commit()
        return booking

    @staticmethod
    async def cancel_booking(db: AsyncSession, booking_id: int, today: date) -> Booking:
        """Отмена брони"""
        booking = await BookingService.get_booking_or_raise(db, booking_id)

        if booking.status == BookingStatus.CANCELLED:
            raise IllegalTransitionError("Booking is already cancelled")
        if booking.status == BookingStatus.COMPLETED:
            raise IllegalTransitionError("Cannot cancel a completed booking")

        booking.status = BookingStatus.CANCELLED

        # Номер освобождается сразу, если на сегодня других броней нет
        room = await RoomService.get_room_or_raise(db, booking.room_id, with_bookings=True)
        old_room_status = apply_derived_status(room, room.bookings, today)

        await db.commit()

        logger.info(f"Booking #{booking.id} cancelled")
        if old_room_status is not None:
            logger.info(
                f"Room {room.number}: {old_room_status.value} -> {room.status.value}"
            )
        return booking

    @staticmethod
    async def delete_booking(db: AsyncSession, booking_id: int, today: date) -> None:
        """
        Полное удаление брони из базы данных.
        ВНИМАНИЕ: Это действие необратимо!
        """
        booking = await BookingService.get_booking_or_raise(db, booking_id)

        logger.info(
            f"Deleting booking #{booking_id}: {booking.guest_name} "
            f"({booking.check_in} - {booking.check_out})"
        )

        room = await RoomService.get_room_or_raise(db, booking.room_id, with_bookings=True)
        if booking in room.bookings:
            room.bookings.remove(booking)
        apply_derived_status(room, room.bookings, today)

        await db.delete(booking)
        await db.commit()
