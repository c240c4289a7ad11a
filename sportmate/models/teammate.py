import enum

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


class ParticipantStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TeammateRequest(Base):
    """A call for teammates with its own teammate chat room."""

    __tablename__ = "teammate_requests"

    id = Column(String(36), primary_key=True, default=generate_id)
    creator_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    sport = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    description = Column(Text, nullable=False, default="")
    required_participants = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    chat_room_id = Column(String(36), ForeignKey("chat_rooms.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    creator = relationship("User")
    chat_room = relationship("ChatRoom")
    participants = relationship(
        "TeammateParticipant",
        back_populates="request",
        cascade="all, delete-orphan",
    )

    @property
    def approved_count(self) -> int:
        return sum(
            1
            for participant in self.participants
            if participant.status == ParticipantStatus.APPROVED.value
        )

    @property
    def spots_left(self) -> int:
        return max(self.required_participants - self.approved_count, 0)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<TeammateRequest(id={self.id}, sport={self.sport})>"


class TeammateParticipant(Base):

    __tablename__ = "teammate_participants"
    __table_args__ = (UniqueConstraint("request_id", "user_id", name="uq_teammate_participant"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    request_id = Column(
        String(36),
        ForeignKey("teammate_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False, default=ParticipantStatus.PENDING.value)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    request = relationship("TeammateRequest", back_populates="participants")
    user = relationship("User")
