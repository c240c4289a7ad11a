"""API routes for managing bookings."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sportmate.core.security import get_current_user, require_admin
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.schemas.booking import (
    BookingCreate,
    BookingDetail,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
)
from sportmate.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=List[BookingDetail])
def list_bookings(
    *,
    db: Session = Depends(get_db),
    status: Optional[str] = Query(None, description="Filter bookings by status"),
    _: User = Depends(require_admin),
) -> List[BookingDetail]:
    """Retrieve all bookings (admin only)."""

    service = BookingService(db)
    return service.list_bookings(status_filter=status)


@router.get("/me", response_model=List[BookingDetail])
def list_my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[BookingDetail]:
    """Retrieve the caller's bookings, newest first."""

    service = BookingService(db)
    return service.list_user_bookings(current_user.id)


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingDetail:
    service = BookingService(db)
    return service.get_booking_for_user(booking_id, current_user)


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    """Create a pending booking after checking for overlaps."""

    service = BookingService(db)
    return service.create_booking(payload, current_user)


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    """Reschedule one of the caller's pending bookings."""

    service = BookingService(db)
    return service.update_booking(booking_id, payload, current_user)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    service = BookingService(db)
    return service.update_status(booking_id, payload.status, current_user)


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    service = BookingService(db)
    return service.cancel_booking(booking_id, current_user)
