from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from sportmate.core.exceptions import Forbidden, InvalidState, NotFound
from sportmate.models.chat import ChatRoomType
from sportmate.models.teammate import ParticipantStatus, TeammateParticipant, TeammateRequest
from sportmate.models.user import User
from sportmate.repository import chat_repository, teammate_repository
from sportmate.schemas.teammate import TeammateJoin, TeammateRequestCreate, TeammateRequestUpdate
from sportmate.services.chat_service import ChatService

logger = logging.getLogger(__name__)


class TeammateService:
    """Two-phase teammate joins gated by the request creator.

    ``required_participants`` is enforced as a hard cap on approved
    participants.
    """

    def __init__(self, db: Session):
        self.db = db
        self.chat_service = ChatService(db)

    def get_request(self, request_id: str) -> TeammateRequest:
        request = teammate_repository.get_request_with_details(self.db, request_id)
        if request is None:
            raise NotFound("Teammate request not found")
        return request

    def list_requests(
        self,
        *,
        sport: Optional[str] = None,
        target_date: Optional[date] = None,
    ) -> List[TeammateRequest]:
        return teammate_repository.list_requests(self.db, sport=sport, target_date=target_date)

    def list_user_requests(self, user: User) -> List[TeammateRequest]:
        return teammate_repository.list_requests(self.db, creator_id=user.id, active_only=False)

    def create_request(self, payload: TeammateRequestCreate, creator: User) -> TeammateRequest:
        room = chat_repository.create_chat_room(
            self.db,
            {
                "type": ChatRoomType.TEAMMATE.value,
                "name": f"{payload.sport} - {payload.date.isoformat()} {payload.time.strftime('%H:%M')}",
            },
            [creator],
        )

        request_data = payload.model_dump()
        request_data.update(
            creator_id=creator.id,
            chat_room_id=room.id,
            is_active=True,
        )
        request = teammate_repository.create_request(self.db, request_data)
        logger.info("Teammate request %s created by %s", request.id, creator.id)
        return self.get_request(request.id)

    def update_request(
        self,
        request_id: str,
        payload: TeammateRequestUpdate,
        actor: User,
    ) -> TeammateRequest:
        request = self.get_request(request_id)
        if request.creator_id != actor.id:
            raise Forbidden("Not authorized to update this request")

        update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
        required = update_data.get("required_participants")
        if required is not None and required < request.approved_count:
            raise InvalidState("requiredParticipants cannot be lower than the approved participants")

        for attribute, value in update_data.items():
            setattr(request, attribute, value)

        teammate_repository.save_request(self.db, request)
        logger.info("Teammate request %s updated by %s", request.id, actor.id)
        return self.get_request(request.id)

    def delete_request(self, request_id: str, actor: User) -> None:
        request = self.get_request(request_id)
        if request.creator_id != actor.id:
            raise Forbidden("Not authorized to delete this request")
        teammate_repository.delete_request(self.db, request)

    def join_request(self, request_id: str, payload: TeammateJoin, user: User) -> TeammateParticipant:
        request = self.get_request(request_id)

        if request.creator_id == user.id:
            raise InvalidState("You cannot join your own teammate request.")
        if not request.is_active:
            raise InvalidState("Teammate request is no longer active")
        if teammate_repository.find_participant(self.db, request_id=request.id, user_id=user.id):
            raise InvalidState("Already joined this request")
        if request.spots_left <= 0:
            raise InvalidState("Teammate request is already full")

        participant = teammate_repository.create_participant(
            self.db,
            {
                "user_id": user.id,
                "request_id": request.id,
                "status": ParticipantStatus.PENDING.value,
                "message": payload.message,
            },
        )
        logger.info("User %s asked to join teammate request %s", user.id, request.id)
        return teammate_repository.get_participant(self.db, participant.id)

    def update_participant_status(
        self,
        request_id: str,
        participant_id: str,
        target_status: str,
        actor: User,
    ) -> TeammateParticipant:
        request = self.get_request(request_id)
        if request.creator_id != actor.id:
            raise Forbidden("Not authorized to update participant status")

        participant = teammate_repository.get_participant(self.db, participant_id)
        if participant is None or participant.request_id != request.id:
            raise NotFound("Participant not found")

        new_status = ParticipantStatus(target_status)
        if new_status is ParticipantStatus.APPROVED:
            if participant.status != ParticipantStatus.APPROVED.value:
                approved = teammate_repository.approve_participant_within_capacity(
                    self.db,
                    request_id=request.id,
                    participant_id=participant.id,
                )
                if not approved:
                    raise InvalidState("Teammate request is already full")
                logger.info("Participant %s approved on teammate request %s", participant.id, request.id)
            # Reload what the conditional update changed behind the session.
            self.db.expire_all()
            request = self.get_request(request_id)
            participant = teammate_repository.get_participant(self.db, participant_id)
        else:
            participant.status = new_status.value
            teammate_repository.save_participant(self.db, participant)

        if new_status is ParticipantStatus.APPROVED and request.chat_room is not None:
            added = self.chat_service.add_participant_if_missing(request.chat_room, participant.user)
            if added:
                logger.info(
                    "User %s added to teammate chat room %s",
                    participant.user_id,
                    request.chat_room_id,
                )

        return teammate_repository.get_participant(self.db, participant.id)

    def leave_request(self, request_id: str, user: User) -> None:
        participant = teammate_repository.find_participant(self.db, request_id=request_id, user_id=user.id)
        if participant is None:
            raise NotFound("Not a participant in this request")
        teammate_repository.delete_participant(self.db, participant)
