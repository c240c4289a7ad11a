"""Booking status lifecycle and who may drive each transition."""

from __future__ import annotations

from typing import Dict, FrozenSet

from sportmate.core.exceptions import Forbidden, InvalidState, ValidationError
from sportmate.models.booking import BookingStatus

ALLOWED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

ADMIN_TARGETS = frozenset({BookingStatus.CONFIRMED, BookingStatus.REJECTED})
OWNER_TARGETS = frozenset({BookingStatus.CANCELLED})


def _coerce(value: str | BookingStatus) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown booking status: {value}") from exc


def ensure_transition_allowed(
    current: str | BookingStatus,
    target: str | BookingStatus,
    *,
    is_owner: bool,
    is_admin: bool,
) -> BookingStatus:
    """Validate a status change and return the target status.

    Authority is checked before state: an actor who may never perform the
    transition gets ``Forbidden`` regardless of the booking's state.
    """

    current_status = _coerce(current)
    target_status = _coerce(target)

    if target_status in OWNER_TARGETS:
        if not is_owner:
            raise Forbidden("Not authorized to cancel this booking")
    elif target_status in ADMIN_TARGETS:
        if not is_admin:
            raise Forbidden(f"Not authorized to update booking status to {target_status.value}")
    else:
        raise ValidationError(
            'Invalid status provided. Must be "confirmed", "rejected", or "cancelled".'
        )

    if target_status not in ALLOWED_TRANSITIONS[current_status]:
        raise InvalidState(
            f"Cannot change booking from {current_status.value} to {target_status.value}"
        )

    return target_status


__all__ = ["ALLOWED_TRANSITIONS", "ensure_transition_allowed"]
