from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session, joinedload

from sportmate.models.base import utcnow
from sportmate.models.booking import ACTIVE_BOOKING_STATUSES, Booking


def _normalize_statuses(statuses: Optional[Iterable[str]]) -> list[str]:
    return [
        status_value.strip().lower()
        for status_value in (statuses or ())
        if status_value and status_value.strip()
    ]


def get_booking_with_field(db: Session, booking_id: str) -> Optional[Booking]:
    return (
        db.query(Booking)
        .options(joinedload(Booking.field), joinedload(Booking.user))
        .filter(Booking.id == booking_id)
        .first()
    )


def list_bookings(
    db: Session,
    *,
    user_id: Optional[str] = None,
    field_id: Optional[str] = None,
    statuses: Optional[Iterable[str]] = None,
    sort_desc: bool = False,
) -> list[Booking]:
    query = db.query(Booking).options(joinedload(Booking.field), joinedload(Booking.user))

    if user_id is not None:
        query = query.filter(Booking.user_id == user_id)
    if field_id is not None:
        query = query.filter(Booking.field_id == field_id)

    normalized = _normalize_statuses(statuses)
    if normalized:
        query = query.filter(Booking.status.in_(normalized))

    if sort_desc:
        query = query.order_by(Booking.date.desc(), Booking.start_time.desc())
    else:
        query = query.order_by(Booking.date, Booking.start_time)

    return query.all()


def list_active_bookings_for_field_day(
    db: Session,
    *,
    field_id: str,
    target_date: date,
) -> list[Booking]:
    """Bookings holding a slot on ``target_date`` (pending or confirmed)."""

    return (
        db.query(Booking)
        .filter(Booking.field_id == field_id)
        .filter(Booking.date == target_date)
        .filter(Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .order_by(Booking.start_time)
        .all()
    )


def list_active_bookings_in_window(
    db: Session,
    *,
    field_id: str,
    start_date: date,
    end_date: date,
) -> list[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.field_id == field_id)
        .filter(Booking.date >= start_date)
        .filter(Booking.date <= end_date)
        .filter(Booking.status.in_(ACTIVE_BOOKING_STATUSES))
        .all()
    )


def create_booking(db: Session, booking_data: Dict[str, object]) -> Booking:
    booking = Booking(**booking_data)
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


def update_if_status(
    db: Session,
    booking_id: str,
    *,
    expected_status: str,
    values: Dict[str, object],
) -> bool:
    """Write ``values`` only while the booking still holds ``expected_status``.

    Returns ``False`` when another writer changed the row first.
    """

    changes = {getattr(Booking, key): value for key, value in values.items()}
    changes[Booking.updated_at] = utcnow()
    updated_rows = (
        db.query(Booking)
        .filter(Booking.id == booking_id)
        .filter(Booking.status == expected_status)
        .update(changes, synchronize_session=False)
    )
    db.commit()
    return updated_rows == 1


def compare_and_set_status(
    db: Session,
    booking_id: str,
    *,
    expected_status: str,
    new_status: str,
) -> bool:
    """Move a booking to ``new_status`` only if it still holds ``expected_status``."""

    return update_if_status(
        db,
        booking_id,
        expected_status=expected_status,
        values={"status": new_status},
    )
