"""Chat rooms, their participants and persisted messages."""

import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import relationship

from sportmate.core.database import Base
from sportmate.models.base import generate_id, utcnow


class ChatRoomType(str, enum.Enum):
    DIRECT = "direct"
    TEAMMATE = "teammate"
    EVENT = "event"


chat_room_participants = Table(
    "chat_room_participants",
    Base.metadata,
    Column(
        "chat_room_id",
        String(36),
        ForeignKey("chat_rooms.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", String(36), ForeignKey("users.id"), primary_key=True),
)


class ChatRoom(Base):

    __tablename__ = "chat_rooms"

    id = Column(String(36), primary_key=True, default=generate_id)
    type = Column(String(20), nullable=False, default=ChatRoomType.DIRECT.value)
    name = Column(String(255), nullable=True)
    # Sorted "<user>:<user>" pair, set only for direct rooms.
    direct_key = Column(String(80), nullable=True, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    participants = relationship("User", secondary=chat_room_participants)
    messages = relationship(
        "Message",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<ChatRoom(id={self.id}, type={self.type})>"


class Message(Base):

    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    content = Column(Text, nullable=False)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    room_id = Column(
        String(36),
        ForeignKey("chat_rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Client-assigned send time, stored as received.
    timestamp = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    is_read = Column(Boolean, nullable=False, default=False)

    room = relationship("ChatRoom", back_populates="messages")
    sender = relationship("User")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Message(id={self.id}, room_id={self.room_id}, sender_id={self.sender_id})>"
