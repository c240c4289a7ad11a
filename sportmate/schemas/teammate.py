from datetime import date, datetime, time
from datetime import date as Date
from datetime import time as Time
from typing import List, Literal, Optional

from pydantic import Field, field_serializer

from sportmate.schemas.base import CamelModel
from sportmate.schemas.chat import ChatRoomResponse
from sportmate.schemas.user import UserSummary


class TeammateRequestCreate(CamelModel):
    sport: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    date: date
    time: time
    description: str = ""
    required_participants: int = Field(..., ge=1)


class TeammateRequestUpdate(CamelModel):
    sport: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[Date] = None
    time: Optional[Time] = None
    description: Optional[str] = None
    required_participants: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None


class TeammateJoin(CamelModel):
    message: Optional[str] = Field(None, max_length=1000)


class ParticipantStatusUpdate(CamelModel):
    status: Literal["approved", "rejected"]


class TeammateParticipantResponse(CamelModel):
    id: str
    user_id: str
    request_id: str
    status: str
    message: Optional[str] = None
    user: Optional[UserSummary] = None


class TeammateRequestResponse(CamelModel):
    id: str
    creator_id: str
    sport: str
    location: str
    date: date
    time: time
    description: str
    required_participants: int
    is_active: bool
    approved_count: int
    spots_left: int
    chat_room_id: Optional[str] = None
    created_at: datetime
    creator: Optional[UserSummary] = None
    participants: List[TeammateParticipantResponse] = []

    @field_serializer("time")
    def _serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class TeammateRequestDetail(TeammateRequestResponse):
    chat_room: Optional[ChatRoomResponse] = None
