class BookingError(Exception):
    """Base class for failures of the booking pipeline."""


class ValidationError(BookingError):
    """One or more field-level violations, in field declaration order."""

    def __init__(self, messages):
        self.messages = tuple(messages)
        super().__init__(", ".join(self.messages))


class NotFound(BookingError):
    pass


class InvalidId(BookingError):
    pass


class PersistenceError(BookingError):
    """The store was unreachable or rejected the operation."""
