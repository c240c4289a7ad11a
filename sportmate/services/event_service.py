from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sportmate.core.exceptions import Forbidden, InvalidState, NotFound
from sportmate.models.chat import ChatRoomType
from sportmate.models.event import Event, EventParticipant
from sportmate.models.user import User
from sportmate.repository import chat_repository, event_repository, field_repository
from sportmate.schemas.event import EventCreate, EventJoin, EventUpdate
from sportmate.services.chat_service import ChatService

logger = logging.getLogger(__name__)


class EventService:
    """Single-phase event joins.

    The organizer is never stored as a participant row but is always a
    member of the event's chat room. Leaving an event keeps the user in
    the chat room.
    """

    def __init__(self, db: Session):
        self.db = db
        self.chat_service = ChatService(db)

    def get_event(self, event_id: str) -> Event:
        event = event_repository.get_event_with_details(self.db, event_id)
        if event is None:
            raise NotFound("Event not found")
        return event

    def list_events(
        self,
        *,
        sport: Optional[str] = None,
        target_date: Optional[date] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Event], int, int]:
        events, total = event_repository.list_events(
            self.db,
            sport=sport,
            target_date=target_date,
            offset=(page - 1) * limit,
            limit=limit,
        )
        last_page = math.ceil(total / limit) if total else 0
        return events, total, last_page

    def list_user_events(self, user: User) -> List[Event]:
        return event_repository.list_events_by_organizer(self.db, user.id)

    def create_event(self, payload: EventCreate, organizer: User) -> Event:
        if payload.field_id is not None and field_repository.get_field(self.db, payload.field_id) is None:
            raise NotFound("Field not found")

        room = chat_repository.create_chat_room(
            self.db,
            {"type": ChatRoomType.EVENT.value, "name": payload.title},
            [organizer],
        )

        event_data = payload.model_dump(exclude={"title"})
        event_data.update(
            name=payload.title,
            organizer_id=organizer.id,
            chat_room_id=room.id,
            is_active=True,
        )
        event = event_repository.create_event(self.db, event_data)
        logger.info("Event %s created by %s", event.id, organizer.id)
        return self.get_event(event.id)

    def update_event(self, event_id: str, payload: EventUpdate, actor: User) -> Event:
        event = self.get_event(event_id)
        if event.organizer_id != actor.id:
            raise Forbidden("Not authorized to update this event")

        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        attending = sum(1 for participant in event.participants if participant.is_attending)
        max_participants = update_data.get("max_participants")
        if max_participants and max_participants < attending:
            raise InvalidState("maxParticipants cannot be lower than the current attendance")

        title = update_data.pop("title", None)
        if title is not None:
            event.name = title
            # The event's chat room carries the event title.
            if event.chat_room is not None:
                event.chat_room.name = title

        for attribute, value in update_data.items():
            setattr(event, attribute, value)

        event_repository.save_event(self.db, event)
        logger.info("Event %s updated by %s", event.id, actor.id)
        return self.get_event(event.id)

    def delete_event(self, event_id: str, actor: User) -> None:
        event = self.get_event(event_id)
        if event.organizer_id != actor.id:
            raise Forbidden("Not authorized to delete this event")
        event_repository.delete_event(self.db, event)

    def join_event(self, event_id: str, payload: EventJoin, user: User) -> EventParticipant:
        event = self.get_event(event_id)

        if event.organizer_id == user.id:
            raise InvalidState("Event organizer cannot join their own event")
        if event_repository.find_participant(self.db, event_id=event.id, user_id=user.id):
            raise InvalidState("Already joined this event")

        participant = event_repository.create_participant(
            self.db,
            {
                "user_id": user.id,
                "event_id": event.id,
                "is_attending": True,
                "notes": payload.notes,
            },
        )

        if event.chat_room_id is not None:
            room = self.chat_service.get_room(event.chat_room_id)
            self.chat_service.add_participant_if_missing(room, user)

        logger.info("User %s joined event %s", user.id, event.id)
        return participant

    def leave_event(self, event_id: str, user: User) -> None:
        participant = event_repository.find_participant(self.db, event_id=event_id, user_id=user.id)
        if participant is None:
            raise NotFound("Not a participant in this event")
        event_repository.delete_participant(self.db, participant)
