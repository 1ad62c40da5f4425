"""Server-side booking rules.

Raw request bodies go through :func:`validate_booking` (ordered violation
messages) and then :func:`normalize_booking`, which is the only way to obtain
a :class:`NewBooking`. The repository accepts nothing else.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

from app.core.errors import ValidationError

# Permissive on purpose: syntactic check only, no deliverability
EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")

TOUR_TYPES = ("guided", "self-guided", "private")
MIN_NAME_LENGTH = 2
MIN_VISITORS = 1
MAX_VISITORS = 20
MAX_SPECIAL_REQUESTS = 500

REQUIRED_FIELDS = ("visitorName", "email", "phone", "visitDate", "numberOfVisitors", "tourType")


@dataclass(frozen=True)
class ValidationResult:
    messages: tuple = ()

    @property
    def valid(self) -> bool:
        return not self.messages


@dataclass(frozen=True)
class NewBooking:
    """A booking request that passed validation and was normalized."""

    visitor_name: str
    email: str
    phone: str
    visit_date: date
    number_of_visitors: int
    tour_type: str
    special_requests: Optional[str] = None

    def as_request(self) -> dict:
        return {
            "visitorName": self.visitor_name,
            "email": self.email,
            "phone": self.phone,
            "visitDate": self.visit_date,
            "numberOfVisitors": self.number_of_visitors,
            "tourType": self.tour_type,
            "specialRequests": self.special_requests,
        }


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_visit_date(value: Any) -> Optional[date]:
    """Accept a date, a datetime, 'YYYY-MM-DD' or an ISO datetime string; None otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    try:
        if len(s) <= 10:
            return date.fromisoformat(s)
        # Full timestamp: the calendar date as written, time and offset ignored
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        return datetime.fromisoformat(s).date()
    except ValueError:
        return None


def parse_visitors(value: Any) -> Optional[int]:
    """Coerce the wire representation to an int; None when it is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _check_visitor_name(value, today):
    if _blank(value):
        return "Visitor name is required"
    if not isinstance(value, str):
        return "Visitor name must be text"
    if len(value.strip()) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters"
    return None


def _check_email(value, today):
    if _blank(value):
        return "Email is required"
    if not isinstance(value, str):
        return "Email must be text"
    if not EMAIL_RE.match(value.strip()):
        return "Please enter a valid email address"
    return None


def _check_phone(value, today):
    if _blank(value):
        return "Phone number is required"
    if not isinstance(value, str):
        return "Phone number must be text"
    return None


def _check_visit_date(value, today):
    if _blank(value):
        return "Visit date is required"
    parsed = parse_visit_date(value)
    if parsed is None:
        return "Visit date must be a valid date"
    if parsed < today:
        return "Visit date must be in the future"
    return None


def _check_visitors(value, today):
    if _blank(value):
        return "Number of visitors is required"
    n = parse_visitors(value)
    if n is None:
        return "Number of visitors must be a whole number"
    if n < MIN_VISITORS:
        return f"At least {MIN_VISITORS} visitor required"
    if n > MAX_VISITORS:
        return f"Maximum {MAX_VISITORS} visitors per booking"
    return None


def _check_tour_type(value, today):
    if _blank(value):
        return "Tour type is required"
    if not isinstance(value, str) or value.strip() not in TOUR_TYPES:
        return "Tour type must be one of: " + ", ".join(TOUR_TYPES)
    return None


def _check_special_requests(value, today):
    if value is None:
        return None
    if not isinstance(value, str):
        return "Special requests must be text"
    if len(value.strip()) > MAX_SPECIAL_REQUESTS:
        return f"Special requests cannot exceed {MAX_SPECIAL_REQUESTS} characters"
    return None


# Field declaration order; messages are reported in this order.
RULES: tuple[tuple[str, Callable[[Any, date], Optional[str]]], ...] = (
    ("visitorName", _check_visitor_name),
    ("email", _check_email),
    ("phone", _check_phone),
    ("visitDate", _check_visit_date),
    ("numberOfVisitors", _check_visitors),
    ("tourType", _check_tour_type),
    ("specialRequests", _check_special_requests),
)


def validate_booking(raw: Mapping[str, Any], today: date) -> ValidationResult:
    messages = []
    for field, rule in RULES:
        msg = rule(raw.get(field), today)
        if msg:
            messages.append(msg)
    return ValidationResult(tuple(messages))


def normalize_booking(raw: Mapping[str, Any]) -> NewBooking:
    """Trim, lower-case and coerce an already validated request."""
    special = raw.get("specialRequests")
    special = special.strip() if isinstance(special, str) else None
    return NewBooking(
        visitor_name=raw["visitorName"].strip(),
        email=raw["email"].strip().lower(),
        phone=raw["phone"].strip(),
        visit_date=parse_visit_date(raw["visitDate"]),
        number_of_visitors=parse_visitors(raw["numberOfVisitors"]),
        tour_type=raw["tourType"].strip(),
        special_requests=special or None,
    )


def parse_booking(raw: Mapping[str, Any], today: date) -> NewBooking:
    result = validate_booking(raw, today)
    if not result.valid:
        raise ValidationError(result.messages)
    return normalize_booking(raw)
