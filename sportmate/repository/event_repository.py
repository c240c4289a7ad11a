from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Tuple

from sqlalchemy.orm import Session, joinedload, selectinload

from sportmate.models.event import Event, EventParticipant


def _with_details(query):
    return query.options(
        joinedload(Event.organizer),
        joinedload(Event.chat_room),
        selectinload(Event.participants).joinedload(EventParticipant.user),
    )


def get_event_with_details(db: Session, event_id: str) -> Optional[Event]:
    return _with_details(db.query(Event)).filter(Event.id == event_id).first()


def list_events(
    db: Session,
    *,
    sport: Optional[str] = None,
    target_date: Optional[date] = None,
    offset: int = 0,
    limit: int = 10,
) -> Tuple[list[Event], int]:
    query = db.query(Event).filter(Event.is_active.is_(True))

    if sport is not None:
        query = query.filter(Event.sport == sport)
    if target_date is not None:
        query = query.filter(Event.date == target_date)

    total = query.count()
    events = (
        _with_details(query)
        .order_by(Event.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return events, total


def list_events_by_organizer(db: Session, organizer_id: str) -> list[Event]:
    return (
        _with_details(db.query(Event))
        .filter(Event.organizer_id == organizer_id)
        .order_by(Event.date.desc(), Event.time.desc())
        .all()
    )


def create_event(db: Session, event_data: Dict[str, object]) -> Event:
    event = Event(**event_data)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, event: Event) -> None:
    db.delete(event)
    db.commit()


def find_participant(db: Session, *, event_id: str, user_id: str) -> Optional[EventParticipant]:
    return (
        db.query(EventParticipant)
        .filter(EventParticipant.event_id == event_id)
        .filter(EventParticipant.user_id == user_id)
        .first()
    )


def create_participant(db: Session, participant_data: Dict[str, object]) -> EventParticipant:
    participant = EventParticipant(**participant_data)
    db.add(participant)
    db.commit()
    db.refresh(participant)
    return participant


def delete_participant(db: Session, participant: EventParticipant) -> None:
    db.delete(participant)
    db.commit()


def save_event(db: Session, event: Event) -> Event:
    db.flush()
    db.commit()
    db.refresh(event)
    return event
