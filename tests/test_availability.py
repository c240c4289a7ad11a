from datetime import date, time
from types import SimpleNamespace

import pytest

from sportmate.services.availability import (
    DEFAULT_OPERATING_HOURS,
    build_availability,
    build_operating_hours,
)

TODAY = date(2026, 3, 1)


def _booking(day, start, end, status="pending"):
    return SimpleNamespace(date=day, start_time=time(start), end_time=time(end), status=status)


def test_operating_hours_cover_nine_to_ten_pm_without_duplicates():
    starts = [start for start, _ in DEFAULT_OPERATING_HOURS]

    assert len(DEFAULT_OPERATING_HOURS) == 13
    assert len(set(starts)) == len(starts)
    assert DEFAULT_OPERATING_HOURS[0] == (time(9), time(10))
    assert DEFAULT_OPERATING_HOURS[-1] == (time(21), time(22))


@pytest.mark.parametrize("opening, closing", [(10, 10), (22, 9), (-1, 5), (8, 24)])
def test_operating_hours_reject_invalid_ranges(opening, closing):
    with pytest.raises(ValueError):
        build_operating_hours(opening, closing)


def test_calendar_spans_thirty_days_with_fixed_slot_count():
    availability = build_availability([], TODAY)

    assert len(availability) == 30
    assert availability[0]["date"] == TODAY
    assert availability[-1]["date"] == date(2026, 3, 30)
    assert all(len(day["slots"]) == len(DEFAULT_OPERATING_HOURS) for day in availability)


def test_slot_ids_are_unique_per_calendar():
    availability = build_availability([], TODAY)
    ids = [slot["id"] for day in availability for slot in day["slots"]]

    assert len(ids) == len(set(ids))
    assert ids[0] == "2026-03-01-0"


def test_only_active_bookings_with_exact_range_mark_slots():
    bookings = [
        _booking(TODAY, 9, 10, "pending"),
        _booking(TODAY, 10, 11, "confirmed"),
        _booking(TODAY, 11, 12, "cancelled"),
        _booking(TODAY, 12, 13, "rejected"),
        # A two-hour booking does not match any single slot exactly.
        _booking(TODAY, 14, 16, "confirmed"),
    ]

    slots = build_availability(bookings, TODAY)[0]["slots"]
    booked = [slot["start_time"] for slot in slots if slot["is_booked"]]

    assert booked == ["09:00", "10:00"]


def test_calendar_is_stable_across_calls():
    bookings = [_booking(date(2026, 3, 2), 18, 19, "confirmed")]

    first = build_availability(bookings, TODAY)
    second = build_availability(bookings, TODAY)

    assert first == second
    assert first[1]["slots"][9]["is_booked"] is True
