from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookingRecord(BaseModel):
    """A persisted booking as handed out by the repository (immutable copy)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=32, max_length=32)
    visitor_name: str = Field(..., min_length=2)
    email: str
    phone: str = Field(..., min_length=1)
    visit_date: date
    number_of_visitors: int = Field(..., ge=1, le=20)
    tour_type: str
    special_requests: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class BookingStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_bookings: int = 0
    today_bookings: int = 0
    total_visitors: int = 0
    guided_tours: int = 0
    self_guided_tours: int = 0
    private_tours: int = 0
