from datetime import date
from pydantic import BaseModel


class SweepResultOut(BaseModel):
    as_of: date
    rooms_checked: int
    rooms_skipped: int
    rooms_changed: int
    bookings_started: int
    bookings_completed: int


class OccupancyOut(BaseModel):
    as_of: date
    total_rooms: int
    rooms_by_status: dict[str, int]
    rooms_in_use_today: int
    occupancy_percent: int
    active_bookings: int
