from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel.api.deps import get_db, get_today
from hotel.schemas.stats import OccupancyOut, SweepResultOut
from hotel.services.reconciliation_service import reconcile
from hotel.services.stats_service import StatsService

router = APIRouter(prefix="/api", tags=["operations"])


@router.post("/maintenance/reconcile", response_model=SweepResultOut)
async def run_reconciliation(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """Внеплановая сверка статусов номеров (тот же проход, что и по расписанию)"""
    result = await reconcile(db, today)
    return result.as_dict()


@router.get("/stats/occupancy", response_model=OccupancyOut)
async def occupancy(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    return await StatsService.occupancy(db, today)
