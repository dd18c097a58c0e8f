from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class GuestBase(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=150, pattern=EMAIL_PATTERN)
    phone: str = Field(min_length=1, max_length=20)
    document_id: str = Field(min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, max_length=200)


class GuestCreate(GuestBase):
    pass


class GuestUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=150, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    document_id: Optional[str] = Field(default=None, min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, max_length=200)


class GuestOut(GuestBase):
    id: int
    registered_at: datetime
    bookings_count: int = 0

    model_config = ConfigDict(from_attributes=True)
