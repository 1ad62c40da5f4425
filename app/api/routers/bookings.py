from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.clock import museum_today
from app.core.errors import InvalidId, NotFound, PersistenceError, ValidationError
from app.core.logging import booking_event, logger
from app.db.repository import BookingFilter, BookingRepository
from app.db.session import get_db
from app.services.validation import REQUIRED_FIELDS, TOUR_TYPES, parse_booking, parse_visit_date

router = APIRouter(prefix="/bookings", tags=["bookings"])

MISSING_FIELDS_MESSAGE = "Please fill in all required fields"
SERVER_ERROR_MESSAGE = "Server error. Please try again later."


def get_today() -> date:
    """Current calendar date in the museum's timezone."""
    return museum_today()


def get_repository(db: Session = Depends(get_db)) -> BookingRepository:
    return BookingRepository(db)


@router.post("", status_code=201)
def create_booking(
    payload: Any = Body(default=None),
    repo: BookingRepository = Depends(get_repository),
    today: date = Depends(get_today),
):
    if not isinstance(payload, dict) or not any(f in payload for f in REQUIRED_FIELDS):
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

    try:
        booking = parse_booking(payload, today)
    except ValidationError as ex:
        booking_event("booking_rejected", violations=len(ex.messages))
        raise HTTPException(status_code=400, detail=str(ex))

    try:
        record = repo.create(booking, today=today)
    except PersistenceError:
        logger.exception("BOOKING PERSIST FAILED")
        raise HTTPException(status_code=500, detail=SERVER_ERROR_MESSAGE)

    return {"success": True, "message": "Booking created successfully!", "data": record.to_wire()}


@router.get("")
def list_bookings(
    tour_type: str | None = Query(None, alias="tourType"),
    visit_date: str | None = Query(None, alias="visitDate"),
    repo: BookingRepository = Depends(get_repository),
):
    flt = BookingFilter()
    if tour_type or visit_date:
        if tour_type and tour_type not in TOUR_TYPES:
            raise HTTPException(status_code=400, detail="Unknown tour type")
        parsed = None
        if visit_date:
            parsed = parse_visit_date(visit_date)
            if parsed is None:
                raise HTTPException(status_code=400, detail="Invalid visit date")
        flt = BookingFilter(tour_type=tour_type or None, visit_date=parsed)

    try:
        records = repo.list(flt)
    except PersistenceError:
        logger.exception("BOOKING LIST FAILED")
        raise HTTPException(status_code=500, detail="Server error")

    return {"success": True, "count": len(records), "data": [r.to_wire() for r in records]}


@router.get("/{booking_id}")
def get_booking(booking_id: str, repo: BookingRepository = Depends(get_repository)):
    try:
        record = repo.get_by_id(booking_id)
    except InvalidId:
        raise HTTPException(status_code=400, detail="Invalid booking id")
    except NotFound:
        raise HTTPException(status_code=404, detail="Booking not found")
    except PersistenceError:
        logger.exception("BOOKING FETCH FAILED")
        raise HTTPException(status_code=500, detail="Server error")

    return {"success": True, "data": record.to_wire()}
