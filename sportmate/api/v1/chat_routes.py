"""API routes for chat rooms and message history."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from sportmate.core.security import get_current_user
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.schemas.chat import ChatRoomCreate, ChatRoomResponse, MessageResponse
from sportmate.services.chat_service import ChatService

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/rooms", response_model=List[ChatRoomResponse])
def list_rooms(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[ChatRoomResponse]:
    """Retrieve the caller's rooms ordered by latest activity."""

    service = ChatService(db)
    return service.list_rooms(current_user)


@router.get("/rooms/{room_id}", response_model=ChatRoomResponse)
def get_room(
    room_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatRoomResponse:
    service = ChatService(db)
    return service.get_room_for_user(room_id, current_user)


@router.post("/rooms", response_model=ChatRoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: ChatRoomCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatRoomResponse:
    service = ChatService(db)
    return service.create_room(
        creator=current_user,
        participant_ids=payload.participant_ids,
        name=payload.name,
    )


@router.post("/rooms/direct/{user_id}", response_model=ChatRoomResponse)
def open_direct_room(
    user_id: str,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatRoomResponse:
    """Return the direct room with ``user_id``, creating it on first use."""

    service = ChatService(db)
    room, created = service.get_or_create_direct_room(current_user, user_id)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return room


@router.get("/rooms/{room_id}/messages", response_model=List[MessageResponse])
def list_messages(
    room_id: str,
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    before: Optional[datetime] = Query(None, description="Only messages created before this instant"),
    limit: Optional[int] = Query(None, ge=1),
) -> List[MessageResponse]:
    """Page backwards through history; each page is in chronological order."""

    service = ChatService(db)
    return service.list_messages(room_id, current_user, before=before, limit=limit)


@router.post("/rooms/{room_id}/participants/{user_id}", response_model=ChatRoomResponse)
def add_participant(
    room_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChatRoomResponse:
    service = ChatService(db)
    service.get_room_for_user(room_id, current_user)
    return service.add_participant(room_id, user_id)


@router.delete("/rooms/{room_id}/participants/{user_id}", response_model=ChatRoomResponse)
def remove_participant(
    room_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove a participant; the room is deleted once nobody is left."""

    service = ChatService(db)
    room = service.remove_participant(room_id, user_id, current_user)
    if room is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return room
