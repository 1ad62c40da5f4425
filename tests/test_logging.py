import logging
from datetime import date

from app.core.logging import booking_event
from app.services.validation import NewBooking


def test_booking_event_logs_booking_fields_without_contact_details(caplog):
    booking = NewBooking(
        visitor_name="Jo",
        email="jo@x.com",
        phone="555-0100",
        visit_date=date(2030, 7, 1),
        number_of_visitors=3,
        tour_type="guided",
    )

    with caplog.at_level(logging.INFO, logger="museum"):
        line = booking_event("booking_checked", booking, source="form", note=None)

    assert line == "action=booking_checked tour_type=guided number_of_visitors=3 visit_date=2030-07-01 source=form"
    assert "jo@x.com" not in caplog.text
    assert "555-0100" not in caplog.text
    assert line in caplog.text


def test_booking_event_level(caplog):
    with caplog.at_level(logging.WARNING, logger="museum"):
        booking_event("booking_rejected", violations=2)
        booking_event("store_down", level=logging.ERROR)

    assert [r.levelname for r in caplog.records] == ["ERROR"]
    assert caplog.records[0].getMessage() == "action=store_down"
