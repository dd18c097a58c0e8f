"""
Периодическая задача сверки статусов номеров и броней
"""
import logging
from datetime import date
from typing import Optional

from hotel.core.clock import business_today
from hotel.services.reconciliation_service import SweepResult, reconcile

logger = logging.getLogger(__name__)


async def reconcile_room_statuses_job(as_of: Optional[date] = None) -> Optional[SweepResult]:
    """
    Один тик сверки:
    - номер с активной на сегодня бронью -> OCCUPIED, бронь CONFIRMED -> IN_PROGRESS
    - номер без активной брони -> AVAILABLE, прошедшие брони -> COMPLETED

    Ошибка тика логируется и не пробрасывается: следующий тик и есть повтор.
    """
    logger.info("🔄 Starting room status reconciliation...")

    try:
        from hotel.database import AsyncSessionLocal

        today = as_of or business_today()
        logger.info(f"📅 Today: {today}")

        async with AsyncSessionLocal() as session:
            result = await reconcile(session, today)

        if result.has_changes:
            logger.info(
                f"✅ Reconciliation done: {result.rooms_changed} room(s) changed, "
                f"{result.bookings_started} booking(s) started, "
                f"{result.bookings_completed} booking(s) completed"
            )
        else:
            logger.info("No status updates needed")
        return result

    except Exception as e:
        logger.error(f"❌ Room status reconciliation failed: {e}", exc_info=True)
        return None
