from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from sportmate.core.database import Base
from sportmate.models.base import generate_id, utcnow


class Event(Base):

    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    sport = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    max_participants = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    field_id = Column(String(36), ForeignKey("fields.id", ondelete="SET NULL"), nullable=True)
    chat_room_id = Column(String(36), ForeignKey("chat_rooms.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    organizer = relationship("User")
    field = relationship("Field")
    chat_room = relationship("ChatRoom")
    participants = relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Event(id={self.id}, name={self.name})>"


class EventParticipant(Base):

    __tablename__ = "event_participants"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_participant"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    event_id = Column(
        String(36),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_attending = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    event = relationship("Event", back_populates="participants")
    user = relationship("User")
