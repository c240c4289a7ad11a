"""In-process map of chat rooms to connected sessions.

Presence here only drives live delivery. Persisted ChatRoom membership is
what authorizes a user, and the registry starts empty on every process
start: clients rejoin their rooms after reconnecting.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional, Set

logger = logging.getLogger(__name__)


class LiveSession:
    """One authenticated live connection."""

    def __init__(self, websocket: Any, user_id: str, session_id: Optional[str] = None) -> None:
        self.id = session_id or uuid.uuid4().hex
        self.user_id = user_id
        self._websocket = websocket

    async def send(self, event: str, data: Dict[str, Any]) -> None:
        await self._websocket.send_json({"event": event, "data": data})

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<LiveSession(id={self.id}, user_id={self.user_id})>"


class RoomRegistry:

    def __init__(self) -> None:
        self._rooms: Dict[str, Set[LiveSession]] = {}
        self._memberships: Dict[LiveSession, Set[str]] = {}

    def join(self, room_id: str, session: LiveSession) -> None:
        self._rooms.setdefault(room_id, set()).add(session)
        self._memberships.setdefault(session, set()).add(room_id)
        logger.debug("Session %s joined room %s", session.id, room_id)

    def leave(self, room_id: str, session: LiveSession) -> None:
        members = self._rooms.get(room_id)
        if members is not None:
            members.discard(session)
            if not members:
                del self._rooms[room_id]

        rooms = self._memberships.get(session)
        if rooms is not None:
            rooms.discard(room_id)
            if not rooms:
                del self._memberships[session]

    def disconnect(self, session: LiveSession) -> None:
        """Drop ``session`` from every room it joined."""

        for room_id in list(self._memberships.get(session, ())):
            self.leave(room_id, session)
        logger.debug("Session %s removed from registry", session.id)

    def members(self, room_id: str) -> Set[LiveSession]:
        return set(self._rooms.get(room_id, ()))

    def rooms_of(self, session: LiveSession) -> Set[str]:
        return set(self._memberships.get(session, ()))

    async def broadcast(self, room_id: str, event: str, data: Dict[str, Any]) -> int:
        """Send an event to every session in the room without waiting for acks.

        Sessions whose transport fails are dropped. Returns the number of
        successful deliveries.
        """

        delivered = 0
        for session in self.members(room_id):
            try:
                await session.send(event, data)
            except Exception as exc:
                logger.warning(
                    "Dropping session %s after failed %s delivery: %s",
                    session.id,
                    event,
                    exc,
                )
                self.disconnect(session)
            else:
                delivered += 1
        return delivered

    def clear(self) -> None:
        self._rooms.clear()
        self._memberships.clear()


__all__ = ["LiveSession", "RoomRegistry"]
