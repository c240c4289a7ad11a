"""API routes for fields and their slot calendar."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sportmate.core.security import get_current_user, require_admin
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.schemas.booking import BookingResponse
from sportmate.schemas.field import (
    FieldCreate,
    FieldPage,
    FieldResponse,
    FieldUpdate,
    FieldWithAvailability,
)
from sportmate.services.booking_service import BookingService
from sportmate.services.field_service import FieldService

router = APIRouter(prefix="/fields", tags=["fields"])


@router.get("/", response_model=FieldPage)
def list_fields(
    *,
    db: Session = Depends(get_db),
    sport: Optional[str] = Query(None, description="Filter fields by sport"),
    location: Optional[str] = Query(None, description="Case-insensitive location match"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> FieldPage:
    service = FieldService(db)
    fields, total, last_page = service.list_fields(
        sport=sport, location=location, page=page, limit=limit
    )
    return FieldPage(data=fields, total=total, page=page, last_page=last_page)


@router.get("/{field_id}", response_model=FieldWithAvailability)
def get_field(field_id: str, db: Session = Depends(get_db)) -> FieldWithAvailability:
    """Retrieve a field with its availability for the next 30 days."""

    service = FieldService(db)
    field, availability = service.get_field_with_availability(field_id)
    return FieldWithAvailability(
        **FieldResponse.model_validate(field).model_dump(),
        availability=availability,
    )


@router.get("/{field_id}/bookings/me", response_model=List[BookingResponse])
def list_my_field_bookings(
    field_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[BookingResponse]:
    """Retrieve the caller's pending and confirmed bookings on a field."""

    service = BookingService(db)
    return service.list_user_bookings_for_field(current_user.id, field_id)


@router.post("/", response_model=FieldResponse, status_code=status.HTTP_201_CREATED)
def create_field(
    payload: FieldCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> FieldResponse:
    service = FieldService(db)
    return service.create_field(payload)


@router.put("/{field_id}", response_model=FieldResponse)
def update_field(
    field_id: str,
    payload: FieldUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> FieldResponse:
    service = FieldService(db)
    return service.update_field(field_id, payload)


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_field(
    field_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> None:
    service = FieldService(db)
    service.delete_field(field_id)
