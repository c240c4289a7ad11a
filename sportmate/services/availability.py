"""Bookable hourly slot calendar for a field.

Everything here is a pure function of the field's bookings and the day
the calendar starts on, so it is recomputed on every read.
"""

from __future__ import annotations

from datetime import date, time, timedelta
from typing import Iterable, List, Sequence, Tuple

from sportmate.core.config import settings
from sportmate.models.booking import ACTIVE_BOOKING_STATUSES

SlotTemplate = Tuple[time, time]


def build_operating_hours(opening_hour: int, closing_hour: int) -> List[SlotTemplate]:
    """One-hour slots from ``opening_hour`` up to ``closing_hour``."""

    if not 0 <= opening_hour < closing_hour <= 23:
        raise ValueError(
            f"Invalid operating hours: {opening_hour}:00 - {closing_hour}:00"
        )

    return [(time(hour), time(hour + 1)) for hour in range(opening_hour, closing_hour)]


DEFAULT_OPERATING_HOURS: Sequence[SlotTemplate] = tuple(
    build_operating_hours(settings.OPENING_HOUR, settings.CLOSING_HOUR)
)


def _format(value: time) -> str:
    return value.strftime("%H:%M")


def build_availability(
    bookings: Iterable,
    today: date,
    *,
    days: int = settings.AVAILABILITY_DAYS,
    operating_hours: Sequence[SlotTemplate] = DEFAULT_OPERATING_HOURS,
) -> List[dict]:
    """Return ``days`` consecutive dates starting at ``today`` with their slots.

    A slot is booked when a pending or confirmed booking on that date has
    exactly the slot's start and end time.
    """

    booked_ranges = {
        (booking.date, _format(booking.start_time), _format(booking.end_time))
        for booking in bookings
        if (booking.status or "").lower() in ACTIVE_BOOKING_STATUSES
    }

    availability: List[dict] = []
    for offset in range(days):
        current = today + timedelta(days=offset)
        date_string = current.isoformat()
        slots = []
        for index, (start, end) in enumerate(operating_hours):
            start_text, end_text = _format(start), _format(end)
            slots.append(
                {
                    "id": f"{date_string}-{index}",
                    "start_time": start_text,
                    "end_time": end_text,
                    "is_booked": (current, start_text, end_text) in booked_ranges,
                }
            )
        availability.append({"date": current, "slots": slots})

    return availability


__all__ = ["DEFAULT_OPERATING_HOURS", "build_availability", "build_operating_hours"]
