import enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Numeric, String, Time
from sqlalchemy.orm import relationship

from sportmate.core.database import Base
from sportmate.models.base import generate_id, utcnow


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


# Statuses that hold a slot on the field calendar.
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)


class Booking(Base):

    __tablename__ = "bookings"
    __table_args__ = (Index("ix_bookings_field_date", "field_id", "date"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    field_id = Column(String(36), ForeignKey("fields.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    field = relationship("Field", back_populates="bookings")
    user = relationship("User")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Booking(id={self.id}, status={self.status}, date={self.date}, "
            f"start_time={self.start_time}, end_time={self.end_time})>"
        )
