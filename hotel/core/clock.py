"""
Бизнес-дата отеля.

Единственное место, где читаются системные часы. Всё остальное получает
`today` / `as_of` параметром.
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

from hotel.core.config import settings


def business_today() -> date:
    """Today's date in the hotel's timezone, time of day stripped."""
    return datetime.now(ZoneInfo(settings.hotel_timezone)).date()
