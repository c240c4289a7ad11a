from .booking import BookingCreate, BookingDetail, BookingResponse, BookingStatusUpdate
from .chat import ChatRoomCreate, ChatRoomResponse, MessageResponse
from .event import (
    EventCreate,
    EventJoin,
    EventJoinResponse,
    EventPage,
    EventParticipantResponse,
    EventResponse,
)
from .field import (
    DayAvailability,
    FieldCreate,
    FieldPage,
    FieldResponse,
    FieldUpdate,
    FieldWithAvailability,
    TimeSlotResponse,
)
from .teammate import (
    ParticipantStatusUpdate,
    TeammateJoin,
    TeammateParticipantResponse,
    TeammateRequestCreate,
    TeammateRequestDetail,
    TeammateRequestResponse,
)
from .user import UserSummary

__all__ = [
    "BookingCreate",
    "BookingDetail",
    "BookingResponse",
    "BookingStatusUpdate",
    "ChatRoomCreate",
    "ChatRoomResponse",
    "DayAvailability",
    "EventCreate",
    "EventJoin",
    "EventJoinResponse",
    "EventPage",
    "EventParticipantResponse",
    "EventResponse",
    "FieldCreate",
    "FieldPage",
    "FieldResponse",
    "FieldUpdate",
    "FieldWithAvailability",
    "MessageResponse",
    "ParticipantStatusUpdate",
    "TeammateJoin",
    "TeammateParticipantResponse",
    "TeammateRequestCreate",
    "TeammateRequestDetail",
    "TeammateRequestResponse",
    "TimeSlotResponse",
    "UserSummary",
]
