from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from app.api.routers.bookings import get_repository, get_today
from app.core.clock import MUSEUM_TZ
from app.core.errors import PersistenceError
from app.core.logging import logger
from app.core.security import require_admin
from app.db.repository import BookingRepository
from app.services.stats import booking_stats

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats")
def admin_stats(
    _: None = Depends(require_admin),
    repo: BookingRepository = Depends(get_repository),
    today: date = Depends(get_today),
):
    try:
        records = repo.list()
    except PersistenceError:
        logger.exception("ADMIN STATS FAILED")
        raise HTTPException(status_code=500, detail="Server error")

    stats = booking_stats(records, today, MUSEUM_TZ)
    return {"success": True, "data": stats.model_dump(by_alias=True)}
