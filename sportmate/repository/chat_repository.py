from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import and_, exists, func
from sqlalchemy.orm import Session, joinedload, selectinload

from sportmate.models.chat import ChatRoom, Message, chat_room_participants
from sportmate.models.user import User


def get_chat_room(db: Session, room_id: str) -> Optional[ChatRoom]:
    return db.query(ChatRoom).filter(ChatRoom.id == room_id).first()


def get_chat_room_with_participants(db: Session, room_id: str) -> Optional[ChatRoom]:
    return (
        db.query(ChatRoom)
        .options(selectinload(ChatRoom.participants))
        .filter(ChatRoom.id == room_id)
        .first()
    )


def get_direct_room(db: Session, direct_key: str) -> Optional[ChatRoom]:
    return (
        db.query(ChatRoom)
        .options(selectinload(ChatRoom.participants))
        .filter(ChatRoom.direct_key == direct_key)
        .first()
    )


def is_participant(db: Session, room_id: str, user_id: str) -> bool:
    return db.query(
        exists().where(
            and_(
                chat_room_participants.c.chat_room_id == room_id,
                chat_room_participants.c.user_id == user_id,
            )
        )
    ).scalar()


def list_rooms_for_user(db: Session, user_id: str) -> list[ChatRoom]:
    """Rooms the user belongs to, most recently active first."""

    last_message = (
        db.query(
            Message.room_id.label("room_id"),
            func.max(Message.created_at).label("last_message_at"),
        )
        .group_by(Message.room_id)
        .subquery()
    )

    rooms = (
        db.query(ChatRoom, last_message.c.last_message_at)
        .join(
            chat_room_participants,
            chat_room_participants.c.chat_room_id == ChatRoom.id,
        )
        .outerjoin(last_message, last_message.c.room_id == ChatRoom.id)
        .options(selectinload(ChatRoom.participants))
        .filter(chat_room_participants.c.user_id == user_id)
        .all()
    )

    def _activity(row) -> datetime:
        room, last_message_at = row
        value = last_message_at or room.created_at
        return value.replace(tzinfo=None) if value.tzinfo is not None else value

    return [room for room, _ in sorted(rooms, key=_activity, reverse=True)]


def create_chat_room(db: Session, room_data: Dict[str, object], participants: list[User]) -> ChatRoom:
    room = ChatRoom(**room_data)
    room.participants = list(participants)
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


def add_participant(db: Session, room: ChatRoom, user: User) -> bool:
    """Add ``user`` to ``room``; returns ``False`` when already present."""

    if any(participant.id == user.id for participant in room.participants):
        return False
    room.participants.append(user)
    db.commit()
    return True


def remove_participant(db: Session, room: ChatRoom, user_id: str) -> None:
    room.participants = [
        participant for participant in room.participants if participant.id != user_id
    ]
    db.commit()


def delete_chat_room(db: Session, room: ChatRoom) -> None:
    db.query(Message).filter(Message.room_id == room.id).delete(synchronize_session=False)
    db.delete(room)
    db.commit()


def create_message(db: Session, message_data: Dict[str, object]) -> Message:
    message = Message(**message_data)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def get_message(db: Session, message_id: str) -> Optional[Message]:
    return db.query(Message).filter(Message.id == message_id).first()


def mark_message_read(db: Session, message: Message) -> Message:
    message.is_read = True
    db.commit()
    db.refresh(message)
    return message


def list_messages(
    db: Session,
    room_id: str,
    *,
    before: Optional[datetime] = None,
    limit: int = 50,
) -> list[Message]:
    """Return a page of messages in chronological order.

    The page is selected newest-first so that ``before`` walks backwards
    through history, then reversed for display.
    """

    query = (
        db.query(Message)
        .options(joinedload(Message.sender))
        .filter(Message.room_id == room_id)
    )

    if before is not None:
        query = query.filter(Message.created_at < before)

    page = query.order_by(Message.created_at.desc()).limit(limit).all()
    page.reverse()
    return page
