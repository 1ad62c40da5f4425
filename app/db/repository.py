import re
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.schemas import BookingRecord
from app.core.clock import as_utc, museum_today, utc_now
from app.core.errors import InvalidId, NotFound, PersistenceError
from app.core.logging import booking_event
from app.db.models import Booking
from app.services.validation import NewBooking, normalize_booking, validate_booking

BOOKING_ID_RE = re.compile(r"^[0-9a-f]{32}$")


@dataclass(frozen=True)
class BookingFilter:
    tour_type: Optional[str] = None
    visit_date: Optional[date] = None


def _to_record(b: Booking) -> BookingRecord:
    return BookingRecord(
        id=b.id,
        visitor_name=b.visitor_name,
        email=b.email,
        phone=b.phone,
        visit_date=b.visit_date,
        number_of_visitors=b.number_of_visitors,
        tour_type=b.tour_type,
        special_requests=b.special_requests,
        created_at=as_utc(b.created_at),
    )


class BookingRepository:
    """Owns the bookings table. Callers only ever get BookingRecord copies."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, booking: NewBooking, today: Optional[date] = None) -> BookingRecord:
        if not isinstance(booking, NewBooking):
            raise PersistenceError("Only validated bookings can be stored")

        # Re-check and re-normalize so direct callers cannot bypass either.
        raw = booking.as_request()
        result = validate_booking(raw, today or museum_today())
        if not result.valid:
            raise PersistenceError("Booking rejected by store: " + ", ".join(result.messages))
        booking = normalize_booking(raw)

        row = Booking(
            id=uuid.uuid4().hex,
            visitor_name=booking.visitor_name,
            email=booking.email,
            phone=booking.phone,
            visit_date=booking.visit_date,
            number_of_visitors=booking.number_of_visitors,
            tour_type=booking.tour_type,
            special_requests=booking.special_requests,
            created_at=utc_now(),
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as ex:
            self.db.rollback()
            raise PersistenceError("Could not store booking") from ex

        record = _to_record(row)
        booking_event("booking_created", record)
        return record

    def list(self, filter: Optional[BookingFilter] = None) -> list[BookingRecord]:
        query = self.db.query(Booking)
        if filter is not None:
            if filter.tour_type:
                query = query.filter(Booking.tour_type == filter.tour_type)
            if filter.visit_date:
                query = query.filter(Booking.visit_date == filter.visit_date)
        query = query.order_by(Booking.created_at.desc(), Booking.pk.desc())
        try:
            rows = query.all()
        except SQLAlchemyError as ex:
            raise PersistenceError("Could not list bookings") from ex
        return [_to_record(b) for b in rows]

    def get_by_id(self, booking_id: str) -> BookingRecord:
        if not isinstance(booking_id, str) or not BOOKING_ID_RE.match(booking_id):
            raise InvalidId(booking_id)
        try:
            row = self.db.query(Booking).filter_by(id=booking_id).first()
        except SQLAlchemyError as ex:
            raise PersistenceError("Could not load booking") from ex
        if row is None:
            raise NotFound(booking_id)
        return _to_record(row)

    def count(self) -> int:
        try:
            return self.db.query(Booking).count()
        except SQLAlchemyError as ex:
            raise PersistenceError("Could not count bookings") from ex
