"""Pre-flight checks run by the booking form before it calls the API.

These only exist to give visitors quick feedback; the server re-validates
everything and stays authoritative.
"""
from datetime import date
from typing import Any, Mapping

from app.services.validation import EMAIL_RE, parse_visit_date


def check_form(form: Mapping[str, Any], today: date) -> dict[str, str]:
    """Return {field: message} for every field the form would flag; empty when it looks fine."""
    errors: dict[str, str] = {}

    name = str(form.get("visitorName") or "").strip()
    if not name:
        errors["visitorName"] = "Please enter your name"
    elif len(name) < 2:
        errors["visitorName"] = "Name must be at least 2 characters"

    email = str(form.get("email") or "").strip()
    if not email:
        errors["email"] = "Please enter your email"
    elif not EMAIL_RE.match(email):
        errors["email"] = "Please enter a valid email address"

    if not str(form.get("phone") or "").strip():
        errors["phone"] = "Please enter your phone number"

    visit_date = form.get("visitDate")
    if not visit_date:
        errors["visitDate"] = "Please select a visit date"
    else:
        parsed = parse_visit_date(visit_date)
        if parsed is None or parsed < today:
            errors["visitDate"] = "Visit date must be in the future"

    if form.get("numberOfVisitors") in (None, ""):
        errors["numberOfVisitors"] = "Please select number of visitors"

    if not form.get("tourType"):
        errors["tourType"] = "Please select a tour type"

    return errors


def form_payload(form: Mapping[str, Any]) -> dict:
    """Shape the form values the way the browser posts them (trimmed strings)."""
    payload = {}
    for key in ("visitorName", "email", "phone", "specialRequests"):
        value = form.get(key)
        payload[key] = value.strip() if isinstance(value, str) else value
    visit_date = form.get("visitDate")
    payload["visitDate"] = visit_date.isoformat() if isinstance(visit_date, date) else visit_date
    payload["numberOfVisitors"] = form.get("numberOfVisitors")
    payload["tourType"] = form.get("tourType")
    return payload
