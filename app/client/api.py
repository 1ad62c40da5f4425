from datetime import date, tzinfo
from typing import Any, Mapping, Optional

import requests

from app.api.schemas import BookingStats
from app.client.forms import check_form, form_payload
from app.core.clock import MUSEUM_TZ, museum_today
from app.core.logging import logger
from app.services.stats import booking_stats

CONNECT_ERROR_MESSAGE = "Unable to connect to server. Please check your connection and try again."
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server"


class FormError(Exception):
    """Raised before any request is sent when the form fails its pre-flight checks."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(", ".join(errors.values()))


class ApiError(Exception):
    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}" if status else message)


class BookingClient:
    """Talks to the bookings API on behalf of the booking form and the admin dashboard.

    base_url is the API root, e.g. "http://localhost:5000/api"; tz decides which day counts as today.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
        tz: tzinfo = MUSEUM_TZ,
    ):
        self.base_url = base_url.rstrip("/")
        self.tz = tz
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kw) -> dict:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kw)
        except requests.RequestException as ex:
            logger.warning("API request failed: %s %s (%s)", method, url, ex)
            raise ApiError(None, CONNECT_ERROR_MESSAGE) from ex

        try:
            data = r.json()
        except ValueError:
            # e.g. a proxy's HTML error page
            logger.warning("Non-JSON response from %s %s (status %s)", method, url, r.status_code)
            data = None

        if not isinstance(data, dict):
            raise ApiError(r.status_code, UNEXPECTED_RESPONSE_MESSAGE)
        if not data.get("success", False):
            raise ApiError(r.status_code, data.get("message") or "Request failed")
        return data

    def submit(self, form: Mapping[str, Any], today: Optional[date] = None) -> dict:
        errors = check_form(form, today or museum_today(self.tz))
        if errors:
            raise FormError(errors)
        data = self._request("POST", "/bookings", json=form_payload(form))
        return data["data"]

    def list_bookings(self, tour_type: Optional[str] = None, visit_date: Optional[date] = None) -> list[dict]:
        params = {}
        if tour_type and tour_type != "all":
            params["tourType"] = tour_type
        if visit_date:
            params["visitDate"] = visit_date.isoformat()
        return self._request("GET", "/bookings", params=params)["data"]

    def get_booking(self, booking_id: str) -> dict:
        return self._request("GET", f"/bookings/{booking_id}")["data"]

    def health(self) -> bool:
        try:
            return self._request("GET", "/health").get("status") == "OK"
        except ApiError:
            return False

    def stats(self, auth: Optional[tuple[str, str]] = None, today: Optional[date] = None) -> BookingStats:
        """Server-side counters when admin credentials are given, otherwise computed from the listing."""
        if auth is not None:
            data = self._request("GET", "/admin/stats", auth=auth)["data"]
            return BookingStats.model_validate(data)
        return booking_stats(self.list_bookings(), today or museum_today(self.tz), self.tz)
