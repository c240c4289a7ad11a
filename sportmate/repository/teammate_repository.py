from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased, joinedload, selectinload

from sportmate.models.base import utcnow
from sportmate.models.chat import ChatRoom
from sportmate.models.teammate import ParticipantStatus, TeammateParticipant, TeammateRequest


def _with_details(query):
    return query.options(
        joinedload(TeammateRequest.creator),
        selectinload(TeammateRequest.participants).joinedload(TeammateParticipant.user),
        joinedload(TeammateRequest.chat_room).selectinload(ChatRoom.participants),
    )


def get_request_with_details(db: Session, request_id: str) -> Optional[TeammateRequest]:
    return _with_details(db.query(TeammateRequest)).filter(TeammateRequest.id == request_id).first()


def list_requests(
    db: Session,
    *,
    creator_id: Optional[str] = None,
    sport: Optional[str] = None,
    target_date: Optional[date] = None,
    active_only: bool = True,
) -> list[TeammateRequest]:
    query = _with_details(db.query(TeammateRequest))

    if creator_id is not None:
        query = query.filter(TeammateRequest.creator_id == creator_id)
    if active_only:
        query = query.filter(TeammateRequest.is_active.is_(True))
    if sport is not None:
        query = query.filter(TeammateRequest.sport == sport)
    if target_date is not None:
        query = query.filter(TeammateRequest.date == target_date)

    return query.order_by(TeammateRequest.created_at.desc()).all()


def create_request(db: Session, request_data: Dict[str, object]) -> TeammateRequest:
    request = TeammateRequest(**request_data)
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


def save_request(db: Session, request: TeammateRequest) -> TeammateRequest:
    db.flush()
    db.commit()
    db.refresh(request)
    return request


def delete_request(db: Session, request: TeammateRequest) -> None:
    db.delete(request)
    db.commit()


def get_participant(db: Session, participant_id: str) -> Optional[TeammateParticipant]:
    return (
        db.query(TeammateParticipant)
        .options(joinedload(TeammateParticipant.user))
        .filter(TeammateParticipant.id == participant_id)
        .first()
    )


def find_participant(db: Session, *, request_id: str, user_id: str) -> Optional[TeammateParticipant]:
    return (
        db.query(TeammateParticipant)
        .filter(TeammateParticipant.request_id == request_id)
        .filter(TeammateParticipant.user_id == user_id)
        .first()
    )


def create_participant(db: Session, participant_data: Dict[str, object]) -> TeammateParticipant:
    participant = TeammateParticipant(**participant_data)
    db.add(participant)
    db.commit()
    db.refresh(participant)
    return participant


def save_participant(db: Session, participant: TeammateParticipant) -> TeammateParticipant:
    db.flush()
    db.commit()
    db.refresh(participant)
    return participant


def approve_participant_within_capacity(
    db: Session,
    *,
    request_id: str,
    participant_id: str,
) -> bool:
    """Approve a participant only while approvals stay below the request's capacity.

    The request row is locked first so concurrent approvals on the same
    request are serialised, and the count is re-evaluated inside the
    UPDATE itself. Returns ``False`` when the request is already full.
    """

    db.query(TeammateRequest.id).filter(TeammateRequest.id == request_id).with_for_update().first()

    approved = aliased(TeammateParticipant)
    approved_count = (
        select(func.count(approved.id))
        .where(approved.request_id == request_id)
        .where(approved.status == ParticipantStatus.APPROVED.value)
        .scalar_subquery()
    )
    capacity = (
        select(TeammateRequest.required_participants)
        .where(TeammateRequest.id == request_id)
        .scalar_subquery()
    )

    updated_rows = (
        db.query(TeammateParticipant)
        .filter(TeammateParticipant.id == participant_id)
        .filter(TeammateParticipant.request_id == request_id)
        .filter(TeammateParticipant.status != ParticipantStatus.APPROVED.value)
        .filter(approved_count < capacity)
        .update(
            {
                TeammateParticipant.status: ParticipantStatus.APPROVED.value,
                TeammateParticipant.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return updated_rows == 1


def delete_participant(db: Session, participant: TeammateParticipant) -> None:
    db.delete(participant)
    db.commit()
