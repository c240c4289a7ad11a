from sqlalchemy import JSON, Boolean, Column, DateTime, Numeric, String, Text
from sqlalchemy.orm import relationship

from sportmate.core.database import Base
from sportmate.models.base import generate_id, utcnow


class Field(Base):

    __tablename__ = "fields"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)
    location = Column(String(255), nullable=False)
    sport = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    contact_phone = Column(String(30), nullable=True)
    contact_email = Column(String(255), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    bookings = relationship("Booking", back_populates="field", cascade="all, delete-orphan")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Field(id={self.id}, name={self.name})>"
