"""SQLAlchemy models for the SportMate service."""
from sportmate.models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from sportmate.models.chat import ChatRoom, ChatRoomType, Message, chat_room_participants
from sportmate.models.event import Event, EventParticipant
from sportmate.models.field import Field
from sportmate.models.teammate import ParticipantStatus, TeammateParticipant, TeammateRequest
from sportmate.models.user import User

__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "Booking",
    "BookingStatus",
    "ChatRoom",
    "ChatRoomType",
    "Event",
    "EventParticipant",
    "Field",
    "Message",
    "ParticipantStatus",
    "TeammateParticipant",
    "TeammateRequest",
    "User",
    "chat_room_participants",
]
