from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel.api.deps import get_db, get_today
from hotel.schemas.booking import AvailabilityOut, BookingCreate, BookingOut, BookingUpdate
from hotel.services.booking_service import BookingService

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("", response_model=List[BookingOut])
async def list_bookings(db: AsyncSession = Depends(get_db)):
    return await BookingService.get_all_bookings(db)


@router.get("/availability", response_model=AvailabilityOut)
async def check_availability(
    room_id: int = Query(...),
    check_in: date = Query(...),
    check_out: date = Query(...),
    exclude_booking_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    available = await BookingService.check_availability(
        db, room_id, check_in, check_out, exclude_booking_id=exclude_booking_id
    )
    return AvailabilityOut(
        room_id=room_id, check_in=check_in, check_out=check_out, available=available
    )


@router.get("/guest/{guest_id}", response_model=List[BookingOut])
async def list_guest_bookings(guest_id: int, db: AsyncSession = Depends(get_db)):
    return await BookingService.get_bookings_by_guest(db, guest_id)


@router.get("/{booking_id}", response_model=BookingOut)
async def get_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    return await BookingService.get_booking_or_raise(db, booking_id)


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_in: BookingCreate,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    return await BookingService.create_booking(db, booking_in, today)


@router.put("/{booking_id}", response_model=BookingOut)
async def update_booking(
    booking_id: int,
    booking_in: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    return await BookingService.update_booking(db, booking_id, booking_in, today)


@router.patch("/{booking_id}/cancel", response_model=BookingOut)
async def cancel_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    return await BookingService.cancel_booking(db, booking_id, today)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    await BookingService.delete_booking(db, booking_id, today)
