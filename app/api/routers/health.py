from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.db.session import get_db, ping

router = APIRouter()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    # The admin dashboard checks status == "OK" before polling bookings
    if ping(db):
        return {"success": True, "status": "OK", "database": "connected"}

    return JSONResponse(
        status_code=503,
        content={
            "success": False,
            "status": "ERROR",
            "database": "disconnected",
            "message": "Database unavailable",
        },
    )
