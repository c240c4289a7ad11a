from .booking_service import BookingService
from .chat_service import ChatService
from .event_service import EventService
from .field_service import FieldService
from .teammate_service import TeammateService
from .user_service import UserService

__all__ = [
    "BookingService",
    "ChatService",
    "EventService",
    "FieldService",
    "TeammateService",
    "UserService",
]
