from decimal import Decimal
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, computed_field

from hotel.models import RoomStatus, RoomType

# Тип номера: свободная метка, хранится в нижнем регистре
RoomTypeLabel = Annotated[
    str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=30)
]


class RoomBase(BaseModel):
    number: str = Field(min_length=1, max_length=10)
    room_type: RoomTypeLabel = RoomType.SINGLE.value
    capacity: int = Field(default=1, ge=1, le=10)
    price_per_night: Decimal = Field(gt=0, le=100000, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=500)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    number: Optional[str] = Field(default=None, min_length=1, max_length=10)
    room_type: Optional[RoomTypeLabel] = None
    capacity: Optional[int] = Field(default=None, ge=1, le=10)
    price_per_night: Optional[Decimal] = Field(default=None, gt=0, le=100000, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=500)
    # Ручная смена статуса (техобслуживание, уборка)
    status: Optional[RoomStatus] = None


class RoomOut(RoomBase):
    id: int
    status: RoomStatus

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE
