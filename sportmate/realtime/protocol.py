"""Frames exchanged over the live channel.

Every frame is ``{"event": <name>, "data": {...}}``. Client frames are
validated against a discriminated union before dispatch.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PayloadError

from sportmate.core.exceptions import ValidationError
from sportmate.schemas.base import CamelModel


class RoomData(CamelModel):
    room_id: str = Field(..., min_length=1)


class SendMessageData(CamelModel):
    room_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=5000)
    sender_id: str = Field(..., min_length=1)
    timestamp: datetime


class MarkReadData(CamelModel):
    message_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class JoinRoomEvent(BaseModel):
    event: Literal["join_room"]
    data: RoomData


class LeaveRoomEvent(BaseModel):
    event: Literal["leave_room"]
    data: RoomData


class SendMessageEvent(BaseModel):
    event: Literal["send_message"]
    data: SendMessageData


class MarkMessageReadEvent(BaseModel):
    event: Literal["mark_message_read"]
    data: MarkReadData


ClientEvent = Annotated[
    Union[JoinRoomEvent, LeaveRoomEvent, SendMessageEvent, MarkMessageReadEvent],
    Field(discriminator="event"),
]

_client_event_adapter: TypeAdapter[ClientEvent] = TypeAdapter(ClientEvent)

# Server to client event names.
NEW_MESSAGE = "new_message"
MESSAGE_READ = "message_read"
ERROR = "error"
HEARTBEAT = "heartbeat"


def parse_client_event(raw: Any) -> ClientEvent:
    try:
        return _client_event_adapter.validate_python(raw)
    except PayloadError as exc:
        messages = []
        for error in exc.errors():
            location = ".".join(str(loc) for loc in error.get("loc", ()))
            message = error.get("msg", "Invalid input")
            messages.append(f"{location}: {message}" if location else message)
        raise ValidationError("; ".join(messages) or "Invalid event") from exc


__all__ = [
    "ClientEvent",
    "ERROR",
    "HEARTBEAT",
    "JoinRoomEvent",
    "LeaveRoomEvent",
    "MESSAGE_READ",
    "MarkMessageReadEvent",
    "NEW_MESSAGE",
    "SendMessageEvent",
    "parse_client_event",
]
