"""Persist-then-broadcast delivery of chat messages and read receipts."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import sessionmaker

from sportmate.core.exceptions import DomainError, Forbidden, NotFound
from sportmate.models.base import utcnow
from sportmate.realtime import protocol
from sportmate.realtime.registry import LiveSession, RoomRegistry
from sportmate.repository import chat_repository
from sportmate.schemas.chat import MessageResponse
from sportmate.services.chat_service import ChatService

logger = logging.getLogger(__name__)


class MessagePipeline:
    """Handles client events for one process-wide room registry.

    Clients do not render messages optimistically: the sender sees its
    message only when the persisted record is broadcast back to the room.
    """

    def __init__(self, session_factory: sessionmaker, registry: RoomRegistry) -> None:
        self._session_factory = session_factory
        self._registry = registry
        self._room_locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    @property
    def registry(self) -> RoomRegistry:
        return self._registry

    @property
    def locked_rooms(self) -> int:
        return len(self._room_locks)

    @asynccontextmanager
    async def _room_lock(self, room_id: str) -> AsyncIterator[None]:
        """Serialise work per room; the lock is dropped once nobody holds or awaits it."""

        lock = self._room_locks.setdefault(room_id, asyncio.Lock())
        self._lock_users[room_id] = self._lock_users.get(room_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[room_id] -= 1
            if not self._lock_users[room_id]:
                del self._lock_users[room_id]
                del self._room_locks[room_id]

    async def dispatch(self, session: LiveSession, raw: Any) -> None:
        """Validate and handle one client frame.

        Errors are reported to the triggering session only.
        """

        try:
            event = protocol.parse_client_event(raw)
            if isinstance(event, protocol.JoinRoomEvent):
                await self.join_room(session, event.data.room_id)
            elif isinstance(event, protocol.LeaveRoomEvent):
                self._registry.leave(event.data.room_id, session)
            elif isinstance(event, protocol.SendMessageEvent):
                await self.send_message(session, event.data)
            elif isinstance(event, protocol.MarkMessageReadEvent):
                await self.mark_read(session, event.data)
        except DomainError as exc:
            logger.warning("Rejected live event from session %s: %s", session.id, exc.message)
            await session.send(protocol.ERROR, {"message": exc.message})
        except Exception:
            logger.exception("Failed to process live event from session %s", session.id)
            await session.send(protocol.ERROR, {"message": "Failed to process event"})

    def _ensure_participant(self, room_id: str, user_id: str) -> None:
        db = self._session_factory()
        try:
            ChatService(db).ensure_participant(room_id, user_id)
        finally:
            db.close()

    async def join_room(self, session: LiveSession, room_id: str) -> None:
        await run_in_threadpool(self._ensure_participant, room_id, session.user_id)
        self._registry.join(room_id, session)
        logger.info("User %s joined live room %s", session.user_id, room_id)

    def _persist_message(self, user_id: str, data: protocol.SendMessageData) -> Dict[str, Any]:
        db = self._session_factory()
        try:
            ChatService(db).ensure_participant(data.room_id, user_id)
            message = chat_repository.create_message(
                db,
                {
                    "content": data.content,
                    "sender_id": user_id,
                    "room_id": data.room_id,
                    "timestamp": data.timestamp,
                    "created_at": utcnow(),
                    "is_read": False,
                },
            )
            return MessageResponse.model_validate(message).model_dump(mode="json", by_alias=True)
        finally:
            db.close()

    async def send_message(self, session: LiveSession, data: protocol.SendMessageData) -> Dict[str, Any]:
        if data.sender_id != session.user_id:
            raise Forbidden("senderId does not match the authenticated user")

        await run_in_threadpool(self._ensure_participant, data.room_id, session.user_id)

        # Persist and broadcast under the room lock so every member sees
        # messages in the order they were stored.
        async with self._room_lock(data.room_id):
            payload = await run_in_threadpool(self._persist_message, session.user_id, data)
            await self._registry.broadcast(data.room_id, protocol.NEW_MESSAGE, payload)

        logger.debug("Message %s delivered to room %s", payload["id"], data.room_id)
        return payload

    def _mark_read(self, user_id: str, message_id: str) -> Optional[str]:
        """Mark a message read; returns its room id, or ``None`` for the sender's own message."""

        db = self._session_factory()
        try:
            message = chat_repository.get_message(db, message_id)
            if message is None:
                raise NotFound("Message not found")

            ChatService(db).ensure_participant(message.room_id, user_id)

            if message.sender_id == user_id:
                return None

            if not message.is_read:
                chat_repository.mark_message_read(db, message)
            return message.room_id
        finally:
            db.close()

    async def mark_read(self, session: LiveSession, data: protocol.MarkReadData) -> bool:
        if data.user_id != session.user_id:
            raise Forbidden("userId does not match the authenticated user")

        room_id = await run_in_threadpool(self._mark_read, session.user_id, data.message_id)
        if room_id is None:
            return False

        await self._registry.broadcast(
            room_id,
            protocol.MESSAGE_READ,
            {"messageId": data.message_id, "userId": data.user_id},
        )
        return True


__all__ = ["MessagePipeline"]
