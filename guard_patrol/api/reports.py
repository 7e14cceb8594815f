"""Routes Rapports / Report API routes — indicateurs du jour / same-day indicators."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guard_patrol.api.deps import DATE_PATTERN, get_record_store, today_utc
from guard_patrol.config import settings
from guard_patrol.database import get_db
from guard_patrol.models.user import User, UserRole
from guard_patrol.schemas.report import DailySummary, GuardProgress
from guard_patrol.services.record_store import RecordStore
from guard_patrol.services.report_service import ReportService

router = APIRouter()


@router.get("/daily", response_model=DailySummary)
async def daily_summary(
    date: str | None = Query(None, pattern=DATE_PATTERN),
    db: AsyncSession = Depends(get_db),
    store: RecordStore = Depends(get_record_store),
):
    """Synthese journaliere superviseur / Supervisor daily summary."""
    target_date = date or today_utc()
    records = await store.list_by_date(target_date)
    result = await db.execute(
        select(func.count(User.id)).where(User.role == UserRole.GUARD, User.is_active.is_(True))
    )
    active_guards = result.scalar() or 0
    return ReportService.daily_summary(target_date, len(records), active_guards, settings.DAILY_PATROL_TARGET)


@router.get("/progress", response_model=GuardProgress)
async def guard_progress(
    guard_id: int,
    date: str | None = Query(None, pattern=DATE_PATTERN),
    db: AsyncSession = Depends(get_db),
    store: RecordStore = Depends(get_record_store),
):
    """Avancement d'un agent sur la journee / A guard's progress for the day."""
    guard = await db.get(User, guard_id)
    if not guard or guard.role != UserRole.GUARD:
        raise HTTPException(status_code=404, detail="Guard not found")
    target_date = date or today_utc()
    records = await store.list_by_guard_and_date(guard_id, target_date)
    return ReportService.guard_progress(guard_id, target_date, len(records), settings.DAILY_PATROL_TARGET)
