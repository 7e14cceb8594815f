"""Routes Rondes / Patrol API routes.

Soumission de pointage, consultation et export journalier.
Check-in submission, lookup and daily export.
"""

import io

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from guard_patrol.api.deps import DATE_PATTERN, get_record_store, today_utc
from guard_patrol.config import settings
from guard_patrol.rate_limit import limiter
from guard_patrol.schemas.patrol import PatrolCreate, PatrolRead
from guard_patrol.services.errors import PatrolRejected, RejectionReason
from guard_patrol.services.export_service import PATROL_EXPORT_FIELDS, ExportService
from guard_patrol.services.record_store import RecordStore

router = APIRouter()

# Code HTTP par motif de refus, 400 par defaut / HTTP status per rejection reason, 400 by default
REJECTION_STATUS = {
    RejectionReason.CHECKLIST_INCOMPLETE: 422,
    RejectionReason.SUBMISSION_CONFLICT: 409,
}


@router.post("/", response_model=PatrolRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_CHECKIN)
async def submit_patrol(
    request: Request,
    data: PatrolCreate,
    store: RecordStore = Depends(get_record_store),
):
    """Enregistrer un pointage / Submit a check-in.

    La distance est recalculee ici, la position declaree n'est pas crue sur parole.
    Distance is recomputed here; the reported position is never taken at its word.
    """
    try:
        return await store.append(data)
    except PatrolRejected as exc:
        status_code = REJECTION_STATUS.get(exc.reason, 400)
        raise HTTPException(status_code=status_code, detail=exc.to_detail())


@router.get("/", response_model=list[PatrolRead])
async def list_patrols(
    date: str | None = Query(None, pattern=DATE_PATTERN),
    guard_id: int | None = None,
    store: RecordStore = Depends(get_record_store),
):
    """Rondes du jour, par ordre chronologique / Patrols of the day, oldest first."""
    target_date = date or today_utc()
    if guard_id is not None:
        return await store.list_by_guard_and_date(guard_id, target_date)
    return await store.list_by_date(target_date)


@router.get("/export")
async def export_patrols(
    date: str | None = Query(None, pattern=DATE_PATTERN),
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    store: RecordStore = Depends(get_record_store),
):
    """Exporter les rondes du jour / Export the day's patrols to CSV or XLSX."""
    target_date = date or today_utc()
    records = await store.list_by_date(target_date)
    rows = [ExportService.patrol_to_row(r) for r in records]

    if format == "csv":
        content = ExportService.to_csv(rows, PATROL_EXPORT_FIELDS)
        media_type = "text/csv; charset=utf-8"
    else:
        content = ExportService.to_xlsx(rows, PATROL_EXPORT_FIELDS)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="patrols-{target_date}.{format}"'},
    )
