"""API routes for events and attendance."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sportmate.core.security import get_current_user
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.schemas.event import (
    EventCreate,
    EventJoin,
    EventJoinResponse,
    EventPage,
    EventParticipantResponse,
    EventResponse,
    EventUpdate,
)
from sportmate.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=EventPage)
def list_events(
    *,
    db: Session = Depends(get_db),
    sport: Optional[str] = Query(None),
    date: Optional[date] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> EventPage:
    """List active events; open to anonymous visitors."""

    service = EventService(db)
    events, total, last_page = service.list_events(
        sport=sport, target_date=date, page=page, limit=limit
    )
    return EventPage(data=events, total=total, page=page, last_page=last_page)


@router.get("/me", response_model=List[EventResponse])
def list_my_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[EventResponse]:
    service = EventService(db)
    return service.list_user_events(current_user)


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
) -> EventResponse:
    service = EventService(db)
    return service.get_event(event_id)


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EventResponse:
    service = EventService(db)
    return service.create_event(payload, current_user)


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EventResponse:
    """Edit an event (organizer only)."""

    service = EventService(db)
    return service.update_event(event_id, payload, current_user)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    service = EventService(db)
    service.delete_event(event_id, current_user)


@router.post("/{event_id}/join", response_model=EventJoinResponse, status_code=status.HTTP_201_CREATED)
def join_event(
    event_id: str,
    payload: Optional[EventJoin] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EventJoinResponse:
    """Join an event immediately and enter its chat room."""

    service = EventService(db)
    participant = service.join_event(event_id, payload or EventJoin(), current_user)
    return EventJoinResponse(
        message="Successfully joined the event.",
        participant=EventParticipantResponse.model_validate(participant),
    )


@router.delete("/{event_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    service = EventService(db)
    service.leave_event(event_id, current_user)
