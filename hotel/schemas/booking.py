from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from hotel.models import BookingStatus


class BookingBase(BaseModel):
    guest_id: int
    room_id: int
    check_in: date
    check_out: date
    guests_count: int = Field(default=1, ge=1, le=20)
    notes: Optional[str] = Field(default=None, max_length=500)


class BookingCreate(BookingBase):
    pass


class BookingUpdate(BaseModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests_count: Optional[int] = Field(default=None, ge=1, le=20)
    notes: Optional[str] = Field(default=None, max_length=500)
    # Явный статус перекрывает вычисленный по датам
    status: Optional[BookingStatus] = None


class BookingOut(BookingBase):
    id: int
    status: BookingStatus
    total_amount: Decimal
    nights: int
    created_at: datetime

    guest_name: Optional[str] = None
    room_number: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AvailabilityOut(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    available: bool
