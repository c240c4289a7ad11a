"""Version 1 routers for the SportMate API."""

from fastapi import APIRouter

from sportmate.api.v1 import (
    booking_routes,
    chat_routes,
    event_routes,
    field_routes,
    teammate_routes,
    user_routes,
)

router = APIRouter()
router.include_router(field_routes.router)
router.include_router(booking_routes.router)
router.include_router(teammate_routes.router)
router.include_router(event_routes.router)
router.include_router(chat_routes.router)
router.include_router(user_routes.router)

__all__ = ["router"]
