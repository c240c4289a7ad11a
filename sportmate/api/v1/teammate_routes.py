"""API routes for teammate requests and their participants."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sportmate.core.security import get_current_user
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.schemas.teammate import (
    ParticipantStatusUpdate,
    TeammateJoin,
    TeammateParticipantResponse,
    TeammateRequestCreate,
    TeammateRequestDetail,
    TeammateRequestResponse,
    TeammateRequestUpdate,
)
from sportmate.services.teammate_service import TeammateService

router = APIRouter(prefix="/teammates", tags=["teammates"])


@router.get("/", response_model=List[TeammateRequestResponse])
def list_requests(
    *,
    db: Session = Depends(get_db),
    sport: Optional[str] = Query(None),
    date: Optional[date] = Query(None),
    _: User = Depends(get_current_user),
) -> List[TeammateRequestResponse]:
    service = TeammateService(db)
    return service.list_requests(sport=sport, target_date=date)


@router.get("/me", response_model=List[TeammateRequestResponse])
def list_my_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[TeammateRequestResponse]:
    service = TeammateService(db)
    return service.list_user_requests(current_user)


@router.get("/{request_id}", response_model=TeammateRequestDetail)
def get_request(
    request_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> TeammateRequestDetail:
    service = TeammateService(db)
    return service.get_request(request_id)


@router.post("/", response_model=TeammateRequestDetail, status_code=status.HTTP_201_CREATED)
def create_request(
    payload: TeammateRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TeammateRequestDetail:
    service = TeammateService(db)
    return service.create_request(payload, current_user)


@router.put("/{request_id}", response_model=TeammateRequestDetail)
def update_request(
    request_id: str,
    payload: TeammateRequestUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TeammateRequestDetail:
    """Edit a teammate request (creator only)."""

    service = TeammateService(db)
    return service.update_request(request_id, payload, current_user)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    service = TeammateService(db)
    service.delete_request(request_id, current_user)


@router.post(
    "/{request_id}/join",
    response_model=TeammateParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
def join_request(
    request_id: str,
    payload: Optional[TeammateJoin] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TeammateParticipantResponse:
    """Ask to join a teammate request; the creator approves or rejects."""

    service = TeammateService(db)
    return service.join_request(request_id, payload or TeammateJoin(), current_user)


@router.patch(
    "/{request_id}/participants/{participant_id}/status",
    response_model=TeammateParticipantResponse,
)
def update_participant_status(
    request_id: str,
    participant_id: str,
    payload: ParticipantStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TeammateParticipantResponse:
    service = TeammateService(db)
    return service.update_participant_status(
        request_id, participant_id, payload.status, current_user
    )


@router.delete("/{request_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    service = TeammateService(db)
    service.leave_request(request_id, current_user)
