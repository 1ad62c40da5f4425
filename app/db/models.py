from sqlalchemy import Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

from app.core.clock import utc_now

Base = declarative_base()


class Booking(Base):
    __tablename__ = "bookings"

    # Internal key; also breaks createdAt ties in insertion order
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False)

    visitor_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(80), nullable=False)
    visit_date = Column(Date, nullable=False, index=True)
    number_of_visitors = Column(Integer, nullable=False)
    tour_type = Column(String(20), nullable=False, index=True)  # guided/self-guided/private

    # Optional free-text message
    special_requests = Column(Text, nullable=True)

    # Always UTC
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
