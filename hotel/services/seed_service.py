import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel.models import Guest, Room, RoomStatus, RoomType

logger = logging.getLogger(__name__)

DEMO_ROOMS = [
    ("101", RoomType.SINGLE, 1, Decimal("50.00"), "Single room with city view"),
    ("102", RoomType.DOUBLE, 2, Decimal("80.00"), "Double room with balcony"),
    ("201", RoomType.SUITE, 3, Decimal("150.00"), "Suite with living area"),
    ("202", RoomType.FAMILY, 4, Decimal("120.00"), "Family room with two beds"),
    ("301", RoomType.PRESIDENTIAL, 4, Decimal("300.00"), "Presidential suite"),
]


async def seed_demo_data(db: AsyncSession) -> bool:
    """Демо-данные для пустой базы (idempotent). Returns True if anything was added."""
    rooms_count = await db.scalar(select(func.count()).select_from(Room))
    if rooms_count:
        return False

    db.add_all(
        [
            Room(
                number=number,
                room_type=room_type.value,
                capacity=capacity,
                price_per_night=price,
                status=RoomStatus.AVAILABLE,
                description=description,
            )
            for number, room_type, capacity, price, description in DEMO_ROOMS
        ]
    )
    db.add(
        Guest(
            first_name="John",
            last_name="Doe",
            email="john.doe@example.com",
            phone="+15550100",
            document_id="DOC-0001",
            address="1 Main Street",
        )
    )
    await db.commit()
    logger.info(f"Seeded {len(DEMO_ROOMS)} demo rooms and 1 guest")
    return True
