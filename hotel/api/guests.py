from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel.api.deps import get_db
from hotel.schemas.guest import GuestCreate, GuestOut, GuestUpdate
from hotel.services.guest_service import GuestService

router = APIRouter(prefix="/api/guests", tags=["guests"])


@router.get("", response_model=List[GuestOut])
async def list_guests(db: AsyncSession = Depends(get_db)):
    return await GuestService.get_all_guests(db)


@router.get("/{guest_id}", response_model=GuestOut)
async def get_guest(guest_id: int, db: AsyncSession = Depends(get_db)):
    return await GuestService.get_guest_or_raise(db, guest_id)


@router.post("", response_model=GuestOut, status_code=status.HTTP_201_CREATED)
async def create_guest(guest_in: GuestCreate, db: AsyncSession = Depends(get_db)):
    return await GuestService.create_guest(db, guest_in)


@router.put("/{guest_id}", response_model=GuestOut)
async def update_guest(
    guest_id: int, guest_in: GuestUpdate, db: AsyncSession = Depends(get_db)
):
    return await GuestService.update_guest(db, guest_id, guest_in)


@router.delete("/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_guest(guest_id: int, db: AsyncSession = Depends(get_db)):
    await GuestService.delete_guest(db, guest_id)
