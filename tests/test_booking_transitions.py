import pytest

from sportmate.core.exceptions import Forbidden, InvalidState, ValidationError
from sportmate.models.booking import BookingStatus
from sportmate.services.booking_transitions import ensure_transition_allowed


@pytest.mark.parametrize("target", ["confirmed", "rejected"])
def test_admin_decides_pending_bookings(target):
    result = ensure_transition_allowed("pending", target, is_owner=False, is_admin=True)
    assert result is BookingStatus(target)


@pytest.mark.parametrize("current", ["pending", "confirmed"])
def test_owner_cancels_pending_or_confirmed(current):
    result = ensure_transition_allowed(current, "cancelled", is_owner=True, is_admin=False)
    assert result is BookingStatus.CANCELLED


@pytest.mark.parametrize("target", ["confirmed", "rejected"])
def test_owner_cannot_decide(target):
    with pytest.raises(Forbidden):
        ensure_transition_allowed("pending", target, is_owner=True, is_admin=False)


def test_admin_cannot_cancel_someone_elses_booking():
    with pytest.raises(Forbidden):
        ensure_transition_allowed("pending", "cancelled", is_owner=False, is_admin=True)


@pytest.mark.parametrize(
    "current, target, is_owner, is_admin",
    [
        ("cancelled", "confirmed", False, True),
        ("rejected", "confirmed", False, True),
        ("confirmed", "rejected", False, True),
        ("cancelled", "cancelled", True, False),
        ("rejected", "cancelled", True, False),
    ],
)
def test_terminal_states_refuse_transitions(current, target, is_owner, is_admin):
    with pytest.raises(InvalidState):
        ensure_transition_allowed(current, target, is_owner=is_owner, is_admin=is_admin)


def test_unknown_or_initial_status_is_rejected():
    with pytest.raises(ValidationError):
        ensure_transition_allowed("pending", "archived", is_owner=True, is_admin=True)
    with pytest.raises(ValidationError):
        ensure_transition_allowed("confirmed", "pending", is_owner=True, is_admin=True)
