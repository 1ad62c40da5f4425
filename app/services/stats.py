from datetime import date, datetime, tzinfo
from typing import Any, Iterable, Mapping, Union

from app.api.schemas import BookingRecord, BookingStats
from app.core.clock import MUSEUM_TZ, as_utc


def _field(b: Union[BookingRecord, Mapping[str, Any]], attr: str, wire: str):
    if isinstance(b, BookingRecord):
        return getattr(b, attr)
    return b.get(wire)


def _created_on(value, tz: tzinfo) -> date | None:
    """Calendar day (in tz) a booking was made; naive timestamps are taken as UTC."""
    if isinstance(value, str) and value:
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        return as_utc(value).astimezone(tz).date()
    return None


def booking_stats(
    bookings: Iterable[Union[BookingRecord, Mapping[str, Any]]],
    today: date,
    tz: tzinfo = MUSEUM_TZ,
) -> BookingStats:
    """Dashboard counters. Accepts repository records or wire dicts (as the client receives them).

    `today` must be a date in `tz`.
    """
    stats = BookingStats()
    for b in bookings:
        stats.total_bookings += 1
        if _created_on(_field(b, "created_at", "createdAt"), tz) == today:
            stats.today_bookings += 1
        stats.total_visitors += int(_field(b, "number_of_visitors", "numberOfVisitors") or 0)
        tour = _field(b, "tour_type", "tourType")
        if tour == "guided":
            stats.guided_tours += 1
        elif tour == "self-guided":
            stats.self_guided_tours += 1
        elif tour == "private":
            stats.private_tours += 1
    return stats
