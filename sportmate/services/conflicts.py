"""Half-open interval overlap checks for bookings on the same field and day."""

from __future__ import annotations

from datetime import time
from typing import Iterable, Optional, Protocol, Tuple, Union

from sportmate.core.exceptions import ValidationError

TimeValue = Union[str, time]


class BookedInterval(Protocol):
    start_time: TimeValue
    end_time: TimeValue


def to_minutes(value: TimeValue) -> int:
    """Return minutes since midnight for ``HH:MM`` strings or ``time`` values."""

    if isinstance(value, time):
        return value.hour * 60 + value.minute

    if not isinstance(value, str):
        raise ValidationError(f"Invalid time value: {value!r}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValidationError(f"Time must use HH:MM format, got {value!r}")

    hours, minutes = int(parts[0]), int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValidationError(f"Time out of range: {value!r}")

    return hours * 60 + minutes


def intervals_overlap(first: Tuple[int, int], second: Tuple[int, int]) -> bool:
    """``[s1, e1)`` and ``[s2, e2)`` overlap; touching endpoints do not."""

    start_1, end_1 = first
    start_2, end_2 = second
    return start_1 < end_2 and end_1 > start_2


def find_conflict(
    start_time: TimeValue,
    end_time: TimeValue,
    existing: Iterable[BookedInterval],
) -> Optional[BookedInterval]:
    """Return the first existing booking that overlaps the candidate, if any.

    ``existing`` must already be narrowed to active bookings on the same
    field and date.
    """

    candidate = (to_minutes(start_time), to_minutes(end_time))
    for booking in existing:
        booked = (to_minutes(booking.start_time), to_minutes(booking.end_time))
        if intervals_overlap(candidate, booked):
            return booking
    return None


__all__ = ["find_conflict", "intervals_overlap", "to_minutes"]
