from datetime import datetime
from typing import List, Optional

from pydantic import Field

from sportmate.schemas.base import CamelModel
from sportmate.schemas.user import UserSummary


class ChatRoomCreate(CamelModel):
    name: Optional[str] = Field(None, max_length=255)
    participant_ids: List[str] = Field(default_factory=list)


class ChatRoomResponse(CamelModel):
    id: str
    type: str
    name: Optional[str] = None
    created_at: datetime
    participants: List[UserSummary] = []


class MessageResponse(CamelModel):
    id: str
    content: str
    sender_id: str
    room_id: str
    timestamp: datetime
    created_at: datetime
    is_read: bool
