from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel.api.deps import get_db
from hotel.schemas.room import RoomCreate, RoomOut, RoomUpdate
from hotel.services.room_service import RoomService

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=List[RoomOut])
async def list_rooms(db: AsyncSession = Depends(get_db)):
    return await RoomService.get_all_rooms(db)


@router.get("/available", response_model=List[RoomOut])
async def list_available_rooms(db: AsyncSession = Depends(get_db)):
    """Номера со статусом Available на текущий момент"""
    return await RoomService.get_available_rooms(db)


@router.get("/free", response_model=List[RoomOut])
async def list_free_rooms(
    check_in: date = Query(...),
    check_out: date = Query(...),
    db: AsyncSession = Depends(get_db),
):
    """Номера без пересекающихся броней на [check_in, check_out)"""
    return await RoomService.get_free_rooms(db, check_in, check_out)


@router.get("/{room_id}", response_model=RoomOut)
async def get_room(room_id: int, db: AsyncSession = Depends(get_db)):
    return await RoomService.get_room_or_raise(db, room_id)


@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
async def create_room(room_in: RoomCreate, db: AsyncSession = Depends(get_db)):
    return await RoomService.create_room(db, room_in)


@router.put("/{room_id}", response_model=RoomOut)
async def update_room(
    room_id: int, room_in: RoomUpdate, db: AsyncSession = Depends(get_db)
):
    return await RoomService.update_room(db, room_id, room_in)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(room_id: int, db: AsyncSession = Depends(get_db)):
    await RoomService.delete_room(db, room_id)
