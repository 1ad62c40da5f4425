from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from .config import MUSEUM_TIMEZONE


def _load_zone(name: str) -> tzinfo:
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)


MUSEUM_TZ = _load_zone(MUSEUM_TIMEZONE)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def museum_today(tz: tzinfo = MUSEUM_TZ) -> date:
    return utc_now().astimezone(tz).date()


def as_utc(value: datetime) -> datetime:
    """Stored timestamps are UTC; some backends (SQLite) hand them back naive."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
