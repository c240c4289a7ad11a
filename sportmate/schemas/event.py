from datetime import date, datetime, time
from datetime import date as Date
from datetime import time as Time
from typing import List, Optional

from pydantic import Field, field_serializer

from sportmate.schemas.base import CamelModel
from sportmate.schemas.user import UserSummary


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    sport: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    date: date
    time: time
    max_participants: int = Field(0, ge=0)
    field_id: Optional[str] = None


class EventUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    sport: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[Date] = None
    time: Optional[Time] = None
    max_participants: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class EventJoin(CamelModel):
    notes: Optional[str] = Field(None, max_length=1000)


class EventParticipantResponse(CamelModel):
    id: str
    user_id: str
    event_id: str
    is_attending: bool
    notes: Optional[str] = None
    user: Optional[UserSummary] = None


class EventResponse(CamelModel):
    id: str
    name: str
    description: str
    sport: str
    location: str
    date: date
    time: time
    max_participants: int
    is_active: bool
    organizer_id: str
    field_id: Optional[str] = None
    chat_room_id: Optional[str] = None
    created_at: datetime
    organizer: Optional[UserSummary] = None
    participants: List[EventParticipantResponse] = []

    @field_serializer("time")
    def _serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class EventPage(CamelModel):
    data: List[EventResponse]
    total: int
    page: int
    last_page: int


class EventJoinResponse(CamelModel):
    message: str
    participant: EventParticipantResponse
