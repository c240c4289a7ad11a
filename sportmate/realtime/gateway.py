"""Websocket endpoint for the live chat channel."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import sessionmaker

from sportmate.core.exceptions import Unauthorized
from sportmate.core.security import resolve_user
from sportmate.models.base import utcnow
from sportmate.realtime import protocol
from sportmate.realtime.pipeline import MessagePipeline
from sportmate.realtime.registry import LiveSession

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(session_factory: sessionmaker, token: Optional[str]) -> str:
    if not token:
        raise Unauthorized("Authentication error: No token provided")

    db = session_factory()
    try:
        return resolve_user(db, token).id
    finally:
        db.close()


async def _heartbeat(session: LiveSession, interval: float) -> None:
    """Advisory keep-alive; transport ping/pong decides actual disconnection."""

    while True:
        await asyncio.sleep(interval)
        try:
            await session.send(protocol.HEARTBEAT, {"timestamp": utcnow().isoformat()})
        except Exception as exc:
            logger.debug("Heartbeat to session %s stopped: %s", session.id, exc)
            return


@router.websocket("/ws")
async def live_channel(websocket: WebSocket, token: Optional[str] = Query(None)) -> None:
    state = websocket.app.state
    raw_token = token or websocket.headers.get("authorization")

    try:
        user_id = await run_in_threadpool(_authenticate, state.session_factory, raw_token)
    except Unauthorized as exc:
        logger.info("Refused live connection: %s", exc.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=exc.message)
        return

    await websocket.accept()
    pipeline: MessagePipeline = state.message_pipeline
    session = LiveSession(websocket, user_id)
    heartbeat = asyncio.create_task(
        _heartbeat(session, state.settings.HEARTBEAT_INTERVAL_SECONDS)
    )
    logger.info("Client connected: session %s user %s", session.id, user_id)

    try:
        while True:
            text = await websocket.receive_text()
            try:
                raw = json.loads(text)
            except json.JSONDecodeError:
                await session.send(protocol.ERROR, {"message": "Frames must be JSON objects"})
                continue
            await pipeline.dispatch(session, raw)
    except WebSocketDisconnect:
        pass
    finally:
        heartbeat.cancel()
        pipeline.registry.disconnect(session)
        logger.info("Client disconnected: session %s", session.id)


__all__ = ["router"]
