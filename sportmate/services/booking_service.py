from __future__ import annotations

import logging
from datetime import date, time
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from sportmate.core.exceptions import (
    Conflict,
    Forbidden,
    InvalidState,
    NotFound,
    ValidationError,
)
from sportmate.models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from sportmate.models.user import User
from sportmate.repository import booking_repository, field_repository
from sportmate.schemas.booking import BookingCreate, BookingUpdate
from sportmate.services.booking_transitions import ensure_transition_allowed
from sportmate.services.conflicts import find_conflict, to_minutes

logger = logging.getLogger(__name__)


class BookingService:

    def __init__(self, db: Session):
        self.db = db

    def get_booking(self, booking_id: str) -> Booking:
        booking = booking_repository.get_booking_with_field(self.db, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        return booking

    def get_booking_for_user(self, booking_id: str, user: User) -> Booking:
        booking = self.get_booking(booking_id)
        if booking.user_id != user.id and not user.is_admin:
            raise Forbidden("Not authorized to view this booking")
        return booking

    def list_bookings(self, *, status_filter: Optional[str] = None) -> List[Booking]:
        statuses = [status_filter] if status_filter else None
        return booking_repository.list_bookings(self.db, statuses=statuses)

    def list_user_bookings(self, user_id: str) -> List[Booking]:
        return booking_repository.list_bookings(self.db, user_id=user_id, sort_desc=True)

    def list_user_bookings_for_field(self, user_id: str, field_id: str) -> List[Booking]:
        if field_repository.get_field(self.db, field_id) is None:
            raise NotFound("Field not found")

        return booking_repository.list_bookings(
            self.db,
            user_id=user_id,
            field_id=field_id,
            statuses=ACTIVE_BOOKING_STATUSES,
        )

    @staticmethod
    def _parse_whole_hour(value: str, label: str) -> time:
        minutes = to_minutes(value)
        if minutes % 60:
            raise ValidationError(f"{label} must be on a whole hour")
        return time(minutes // 60)

    def _ensure_slot_free(
        self,
        field_id: str,
        target_date: date,
        start_time: time,
        end_time: time,
        *,
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        existing = booking_repository.list_active_bookings_for_field_day(
            self.db,
            field_id=field_id,
            target_date=target_date,
        )
        if exclude_booking_id is not None:
            existing = [booking for booking in existing if booking.id != exclude_booking_id]

        conflicting = find_conflict(start_time, end_time, existing)
        if conflicting is not None:
            logger.info(
                "Booking request on field %s %s %s-%s conflicts with booking %s",
                field_id,
                target_date,
                start_time.strftime("%H:%M"),
                end_time.strftime("%H:%M"),
                conflicting.id,
            )
            raise Conflict("Field is already booked for this time slot")

    def create_booking(self, payload: BookingCreate, user: User) -> Booking:
        if user.is_admin:
            raise Forbidden("Admins cannot create bookings")

        start_time = self._parse_whole_hour(payload.start_time, "startTime")
        end_time = self._parse_whole_hour(payload.end_time, "endTime")
        hours = end_time.hour - start_time.hour
        if hours <= 0:
            raise ValidationError("endTime must be after startTime")

        field = field_repository.get_field(self.db, payload.field_id)
        if field is None:
            raise NotFound("Field not found")
        if not field.is_available:
            raise InvalidState("Field is not available for booking")

        # Read the day's active bookings immediately before inserting.
        self._ensure_slot_free(field.id, payload.date, start_time, end_time)

        booking = booking_repository.create_booking(
            self.db,
            {
                "user_id": user.id,
                "field_id": field.id,
                "date": payload.date,
                "start_time": start_time,
                "end_time": end_time,
                "total_price": Decimal(field.price) * hours,
                "status": BookingStatus.PENDING.value,
            },
        )
        logger.info("Booking %s created by user %s on field %s", booking.id, user.id, field.id)
        return self.get_booking(booking.id)

    def update_booking(self, booking_id: str, payload: BookingUpdate, user: User) -> Booking:
        """Reschedule a pending booking owned by ``user``.

        The new range is checked against the field's other active bookings
        and the price is recomputed for the new duration.
        """

        booking = self.get_booking(booking_id)
        if booking.user_id != user.id:
            raise Forbidden("Not authorized to update this booking")
        if booking.status != BookingStatus.PENDING.value:
            raise InvalidState("Cannot update confirmed or cancelled booking")

        target_date = payload.date or booking.date
        start_time = (
            self._parse_whole_hour(payload.start_time, "startTime")
            if payload.start_time is not None
            else booking.start_time
        )
        end_time = (
            self._parse_whole_hour(payload.end_time, "endTime")
            if payload.end_time is not None
            else booking.end_time
        )
        hours = end_time.hour - start_time.hour
        if hours <= 0:
            raise ValidationError("endTime must be after startTime")

        self._ensure_slot_free(
            booking.field_id,
            target_date,
            start_time,
            end_time,
            exclude_booking_id=booking.id,
        )

        applied = booking_repository.update_if_status(
            self.db,
            booking.id,
            expected_status=BookingStatus.PENDING.value,
            values={
                "date": target_date,
                "start_time": start_time,
                "end_time": end_time,
                "total_price": Decimal(booking.field.price) * hours,
            },
        )
        self.db.expire_all()
        if not applied:
            raise InvalidState("Cannot update confirmed or cancelled booking")

        logger.info("Booking %s rescheduled by user %s", booking.id, user.id)
        return self.get_booking(booking_id)

    def update_status(self, booking_id: str, target_status: str, actor: User) -> Booking:
        """Apply a lifecycle transition with a conditional update on the current status."""

        booking = self.get_booking(booking_id)
        current_status = booking.status

        new_status = ensure_transition_allowed(
            current_status,
            target_status,
            is_owner=booking.user_id == actor.id,
            is_admin=bool(actor.is_admin),
        )

        applied = booking_repository.compare_and_set_status(
            self.db,
            booking.id,
            expected_status=current_status,
            new_status=new_status.value,
        )
        if not applied:
            self.db.expire_all()
            latest = self.get_booking(booking_id)
            raise InvalidState(
                f"Booking status changed concurrently and is now {latest.status}"
            )

        logger.info(
            "Booking %s moved from %s to %s by user %s",
            booking.id,
            current_status,
            new_status.value,
            actor.id,
        )
        self.db.expire_all()
        return self.get_booking(booking_id)

    def cancel_booking(self, booking_id: str, actor: User) -> Booking:
        return self.update_status(booking_id, BookingStatus.CANCELLED.value, actor)
