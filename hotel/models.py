from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import (
    String,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel.database import Base


class RoomType(str, Enum):
    """Known room types. The column is a free label, these are the usual ones."""

    SINGLE = "single"
    DOUBLE = "double"
    SUITE = "suite"
    FAMILY = "family"
    PRESIDENTIAL = "presidential"


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"  # Выставляется администратором
    CLEANING = "cleaning"  # Выставляется администратором


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"  # Гость проживает
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Guest(Base):
    __tablename__ = "guests"

    id: Mapped[int] = mapped_column(primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(150), unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(20))
    document_id: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    address: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    registered_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    bookings: Mapped[list["Booking"]] = relationship(
        back_populates="guest", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def bookings_count(self) -> int:
        return len(self.bookings)


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(primary_key=True)
    number: Mapped[str] = mapped_column(String(10), unique=True, index=True)
    room_type: Mapped[str] = mapped_column(String(30), default=RoomType.SINGLE.value)
    capacity: Mapped[int] = mapped_column(Integer, default=1)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    status: Mapped[RoomStatus] = mapped_column(
        SQLEnum(RoomStatus, values_callable=_enum_values, native_enum=False),
        default=RoomStatus.AVAILABLE,
    )
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    bookings: Mapped[list["Booking"]] = relationship(
        back_populates="room", cascade="all, delete-orphan"
    )


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Связи
    guest_id: Mapped[int] = mapped_column(ForeignKey("guests.id"), index=True)
    guest: Mapped["Guest"] = relationship(back_populates="bookings")
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), index=True)
    room: Mapped["Room"] = relationship(back_populates="bookings")

    # Детали брони
    check_in: Mapped[date] = mapped_column(Date)
    check_out: Mapped[date] = mapped_column(Date)
    guests_count: Mapped[int] = mapped_column(Integer)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Метаданные
    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(BookingStatus, values_callable=_enum_values, native_enum=False),
        default=BookingStatus.CONFIRMED,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def guest_name(self) -> Optional[str]:
        return self.guest.full_name if self.guest else None

    @property
    def room_number(self) -> Optional[str]:
        return self.room.number if self.room else None
