"""Shared dependencies for the SportMate service."""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from sportmate.realtime.registry import RoomRegistry


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""

    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_room_registry(request: Request) -> RoomRegistry:
    return request.app.state.room_registry
