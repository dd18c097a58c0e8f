from datetime import date

from hotel.core.clock import business_today
from hotel.database import get_db  # noqa: F401  (re-exported for routers)


def get_today() -> date:
    """Business date for request handlers. Overridden in tests."""
    return business_today()
