import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel.core.exceptions import ConflictError, NotFoundError, ValidationError
from hotel.domain.room_status import LIVE_BOOKING_STATUSES
from hotel.models import Guest
from hotel.schemas.guest import GuestCreate, GuestUpdate

logger = logging.getLogger(__name__)


class GuestService:
    @staticmethod
    async def get_all_guests(db: AsyncSession) -> List[Guest]:
        result = await db.execute(
            select(Guest).options(selectinload(Guest.bookings)).order_by(Guest.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_guest_by_id(db: AsyncSession, guest_id: int) -> Optional[Guest]:
        result = await db.execute(
            select(Guest)
            .options(selectinload(Guest.bookings))
            .where(Guest.id == guest_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_guest_or_raise(db: AsyncSession, guest_id: int) -> Guest:
        guest = await GuestService.get_guest_by_id(db, guest_id)
        if not guest:
            raise NotFoundError(f"Guest {guest_id} not found")
        return guest

    @staticmethod
    async def _check_unique(
        db: AsyncSession,
        email: Optional[str],
        document_id: Optional[str],
        exclude_guest_id: Optional[int] = None,
    ) -> None:
        checks = (
            (Guest.document_id, document_id, "A guest with this document already exists"),
            (Guest.email, email, "A guest with this email already exists"),
        )
        for column, value, message in checks:
            if value is None:
                continue
            stmt = select(Guest.id).where(column == value)
            if exclude_guest_id is not None:
                stmt = stmt.where(Guest.id != exclude_guest_id)
            result = await db.execute(stmt.limit(1))
            if result.scalar_one_or_none() is not None:
                raise ValidationError(message)

    @staticmethod
    async def create_guest(db: AsyncSession, guest_in: GuestCreate) -> Guest:
        await GuestService._check_unique(db, guest_in.email, guest_in.document_id)

        db_guest = Guest(**guest_in.model_dump(), bookings=[])
        db.add(db_guest)
        await db.commit()
        logger.info(f"Guest #{db_guest.id} registered: {db_guest.full_name}")
        return db_guest

    @staticmethod
    async def update_guest(
        db: AsyncSession, guest_id: int, guest_in: GuestUpdate
    ) -> Guest:
        db_guest = await GuestService.get_guest_or_raise(db, guest_id)

        update_data = guest_in.model_dump(exclude_unset=True, exclude_none=True)
        await GuestService._check_unique(
            db,
            update_data.get("email"),
            update_data.get("document_id"),
            exclude_guest_id=guest_id,
        )

        for key, value in update_data.items():
            setattr(db_guest, key, value)

        await db.commit()
        return db_guest

    @staticmethod
    async def delete_guest(db: AsyncSession, guest_id: int) -> None:
        db_guest = await GuestService.get_guest_or_raise(db, guest_id)

        if any(b.status in LIVE_BOOKING_STATUSES for b in db_guest.bookings):
            logger.warning(f"Refusing to delete guest #{guest_id}: active bookings")
            raise ConflictError("Cannot delete a guest with active bookings")

        await db.delete(db_guest)
        await db.commit()
        logger.info(f"Guest #{guest_id} deleted")
