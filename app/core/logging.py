import logging

from .config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

logger = logging.getLogger("museum")

# Safe to log; visitor name, email and phone stay out of the logs
BOOKING_LOG_FIELDS = ("id", "tour_type", "number_of_visitors", "visit_date")


def booking_event(action: str, booking=None, level: int = logging.INFO, **extra) -> str:
    """Log one booking pipeline event as `action=... id=... tour_type=...` and return the line.

    `booking` may be a stored record or a validated request (which has no id yet).
    """
    parts = [f"action={action}"]
    if booking is not None:
        for name in BOOKING_LOG_FIELDS:
            value = getattr(booking, name, None)
            if value is not None:
                parts.append(f"{name}={value}")
    parts.extend(f"{k}={v}" for k, v in extra.items() if v is not None)
    line = " ".join(parts)
    logger.log(level, line)
    return line
