from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sportmate.core.config import settings
from sportmate.core.exceptions import Forbidden, NotFound, ValidationError
from sportmate.models.chat import ChatRoom, ChatRoomType, Message
from sportmate.models.user import User
from sportmate.repository import chat_repository, user_repository

logger = logging.getLogger(__name__)


def direct_room_key(first_user_id: str, second_user_id: str) -> str:
    """Key a direct room by the unordered pair of its participants."""

    return ":".join(sorted((first_user_id, second_user_id)))


class ChatService:
    """Persisted chat rooms: membership, history and lifecycle."""

    def __init__(self, db: Session):
        self.db = db

    def get_room(self, room_id: str) -> ChatRoom:
        room = chat_repository.get_chat_room_with_participants(self.db, room_id)
        if room is None:
            raise NotFound("Chat room not found")
        return room

    def _get_user(self, user_id: str) -> User:
        user = user_repository.get_user(self.db, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def ensure_participant(self, room_id: str, user_id: str) -> None:
        if chat_repository.get_chat_room(self.db, room_id) is None:
            raise NotFound("Chat room not found")
        if not chat_repository.is_participant(self.db, room_id, user_id):
            raise Forbidden("Not a participant of this chat room")

    def get_room_for_user(self, room_id: str, user: User) -> ChatRoom:
        room = self.get_room(room_id)
        if not any(participant.id == user.id for participant in room.participants):
            raise Forbidden("Not a participant of this chat room")
        return room

    def list_rooms(self, user: User) -> List[ChatRoom]:
        return chat_repository.list_rooms_for_user(self.db, user.id)

    def create_room(
        self,
        *,
        creator: User,
        participant_ids: List[str],
        name: Optional[str] = None,
        room_type: Optional[ChatRoomType] = None,
    ) -> ChatRoom:
        unique_ids = list(dict.fromkeys([*participant_ids, creator.id]))
        participants = user_repository.list_users_by_ids(self.db, unique_ids)
        if len(participants) != len(unique_ids):
            raise NotFound("One or more users not found")

        if room_type is None:
            room_type = ChatRoomType.DIRECT if len(unique_ids) == 2 else ChatRoomType.EVENT

        if room_type is ChatRoomType.DIRECT:
            if len(unique_ids) != 2:
                raise ValidationError("Direct rooms need exactly two participants")
            other_id = next(user_id for user_id in unique_ids if user_id != creator.id)
            room, _ = self.get_or_create_direct_room(creator, other_id)
            return room

        return chat_repository.create_chat_room(
            self.db,
            {"type": room_type.value, "name": name},
            participants,
        )

    def get_or_create_direct_room(self, user: User, other_user_id: str) -> Tuple[ChatRoom, bool]:
        """Return ``(room, created)`` for the direct room between two users."""

        if other_user_id == user.id:
            raise ValidationError("Cannot open a direct chat with yourself")

        other = self._get_user(other_user_id)
        key = direct_room_key(user.id, other.id)

        existing = chat_repository.get_direct_room(self.db, key)
        if existing is not None:
            # A member who left the pair's room is brought back on reopen.
            for member in (user, other):
                if chat_repository.add_participant(self.db, existing, member):
                    logger.info("User %s rejoined direct room %s", member.id, existing.id)
            return existing, False

        room = chat_repository.create_chat_room(
            self.db,
            {"type": ChatRoomType.DIRECT.value, "name": None, "direct_key": key},
            [user, other],
        )
        logger.info("Direct room %s opened between %s and %s", room.id, user.id, other.id)
        return room, True

    def add_participant(self, room_id: str, user_id: str) -> ChatRoom:
        room = self.get_room(room_id)
        user = self._get_user(user_id)
        if room.type == ChatRoomType.DIRECT.value:
            raise ValidationError("Cannot add participants to a direct chat")
        if not chat_repository.add_participant(self.db, room, user):
            raise ValidationError("User is already a participant")
        return self.get_room(room_id)

    def add_participant_if_missing(self, room: ChatRoom, user: User) -> bool:
        return chat_repository.add_participant(self.db, room, user)

    def remove_participant(self, room_id: str, user_id: str, actor: User) -> Optional[ChatRoom]:
        """Remove a participant; deletes the room when it becomes empty.

        Any participant may remove others from a group room, but direct
        rooms only allow leaving them yourself.
        """

        room = self.get_room_for_user(room_id, actor)
        if room.type == ChatRoomType.DIRECT.value and user_id != actor.id:
            raise Forbidden("Only you can remove yourself from a direct chat")
        if not any(participant.id == user_id for participant in room.participants):
            raise NotFound("User is not a participant of this chat room")

        chat_repository.remove_participant(self.db, room, user_id)

        if not room.participants:
            chat_repository.delete_chat_room(self.db, room)
            logger.info("Chat room %s deleted after its last participant left", room_id)
            return None

        return self.get_room(room_id)

    def list_messages(
        self,
        room_id: str,
        user: User,
        *,
        before: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Message]:
        self.ensure_participant(room_id, user.id)

        page_size = limit or settings.MESSAGE_PAGE_SIZE
        page_size = max(1, min(page_size, settings.MESSAGE_PAGE_MAX))

        return chat_repository.list_messages(
            self.db,
            room_id,
            before=before,
            limit=page_size,
        )
