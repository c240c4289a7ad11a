from datetime import date, timedelta
from decimal import Decimal

from helpers import API, auth_headers

from sportmate.repository import booking_repository

PLAY_DATE = (date.today() + timedelta(days=3)).isoformat()


def _book(client, user, field, start="09:00", end="10:00", day=PLAY_DATE):
    return client.post(
        f"{API}/bookings/",
        json={"fieldId": field.id, "date": day, "startTime": start, "endTime": end},
        headers=auth_headers(user),
    )


def _set_status(client, user, booking_id, status):
    return client.patch(
        f"{API}/bookings/{booking_id}/status",
        json={"status": status},
        headers=auth_headers(user),
    )


def test_booking_is_priced_per_hour_and_starts_pending(client, make_user, make_field):
    user = make_user()
    field = make_field(price="100000")

    response = _book(client, user, field)

    assert response.status_code == 201
    body = response.json()
    assert Decimal(str(body["totalPrice"])) == Decimal("100000")
    assert body["status"] == "pending"
    assert body["startTime"] == "09:00"
    assert body["endTime"] == "10:00"
    assert body["userId"] == user.id


def test_multi_hour_booking_multiplies_price(client, make_user, make_field):
    field = make_field(price="80")

    response = _book(client, make_user(), field, start="18:00", end="21:00")

    assert response.status_code == 201
    assert Decimal(str(response.json()["totalPrice"])) == Decimal("240")


def test_same_slot_for_second_user_conflicts(client, make_user, make_field):
    field = make_field()
    assert _book(client, make_user(), field).status_code == 201

    response = _book(client, make_user(), field)

    assert response.status_code == 409
    assert response.json()["detail"] == "Field is already booked for this time slot"


def test_overlapping_confirmed_booking_conflicts(client, make_user, make_field):
    admin = make_user(is_admin=True)
    field = make_field()
    booking_id = _book(client, make_user(), field, start="09:00", end="11:00").json()["id"]
    assert _set_status(client, admin, booking_id, "confirmed").status_code == 200

    response = _book(client, make_user(), field, start="10:00", end="12:00")

    assert response.status_code == 409


def test_touching_bookings_do_not_conflict(client, make_user, make_field):
    field = make_field()
    assert _book(client, make_user(), field, start="09:00", end="10:00").status_code == 201

    assert _book(client, make_user(), field, start="10:00", end="11:00").status_code == 201


def test_same_slot_on_another_day_or_field_is_free(client, make_user, make_field):
    field = make_field()
    other_field = make_field(sport="tennis")
    user = make_user()
    assert _book(client, user, field).status_code == 201

    next_day = (date.today() + timedelta(days=4)).isoformat()
    assert _book(client, make_user(), field, day=next_day).status_code == 201
    assert _book(client, make_user(), other_field).status_code == 201


def test_cancelled_or_rejected_bookings_free_the_slot(client, make_user, make_field):
    admin = make_user(is_admin=True)
    owner = make_user()
    field = make_field()

    cancelled_id = _book(client, owner, field).json()["id"]
    assert _set_status(client, owner, cancelled_id, "cancelled").status_code == 200
    rejected_id = _book(client, make_user(), field).json()["id"]
    assert _set_status(client, admin, rejected_id, "rejected").status_code == 200

    response = _book(client, make_user(), field)

    assert response.status_code == 201


def test_booking_validation_errors(client, make_user, make_field):
    user = make_user()
    field = make_field()

    assert _book(client, user, field, start="09:30", end="10:30").status_code == 400
    assert _book(client, user, field, start="11:00", end="10:00").status_code == 400
    assert _book(client, user, field, start="10:00", end="10:00").status_code == 400
    assert _book(client, user, field, start="ab:cd", end="10:00").status_code == 400


def test_booking_unknown_or_unavailable_field(client, make_user, make_field):
    user = make_user()
    closed = make_field(is_available=False)

    missing = client.post(
        f"{API}/bookings/",
        json={"fieldId": "missing", "date": PLAY_DATE, "startTime": "09:00", "endTime": "10:00"},
        headers=auth_headers(user),
    )
    unavailable = _book(client, user, closed)

    assert missing.status_code == 404
    assert unavailable.status_code == 400
    assert unavailable.json()["detail"] == "Field is not available for booking"


def test_admin_cannot_create_bookings(client, make_user, make_field):
    response = _book(client, make_user(is_admin=True), make_field())

    assert response.status_code == 403


def test_booking_requires_bearer_token(client, make_field):
    field = make_field()

    response = client.post(
        f"{API}/bookings/",
        json={"fieldId": field.id, "date": PLAY_DATE, "startTime": "09:00", "endTime": "10:00"},
    )

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_confirm_cancel_then_reconfirm_is_invalid(client, make_user, make_field):
    admin = make_user(is_admin=True)
    owner = make_user()
    booking_id = _book(client, owner, make_field()).json()["id"]

    confirmed = _set_status(client, admin, booking_id, "confirmed")
    cancelled = _set_status(client, owner, booking_id, "cancelled")
    reconfirmed = _set_status(client, admin, booking_id, "confirmed")

    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "confirmed"
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert reconfirmed.status_code == 400


def test_wrong_actor_is_forbidden(client, make_user, make_field):
    admin = make_user(is_admin=True)
    owner = make_user()
    stranger = make_user()
    booking_id = _book(client, owner, make_field()).json()["id"]

    assert _set_status(client, owner, booking_id, "confirmed").status_code == 403
    assert _set_status(client, stranger, booking_id, "cancelled").status_code == 403
    assert _set_status(client, admin, booking_id, "cancelled").status_code == 403
    assert _set_status(client, owner, booking_id, "pending").status_code == 400


def test_status_update_for_unknown_booking(client, make_user):
    response = _set_status(client, make_user(is_admin=True), "missing", "confirmed")

    assert response.status_code == 404


def test_cancel_shortcut_and_listing(client, make_user, make_field):
    owner = make_user()
    field = make_field()
    first = _book(client, owner, field, start="09:00", end="10:00").json()["id"]
    _book(client, owner, field, start="12:00", end="13:00")

    cancel = client.patch(f"{API}/bookings/{first}/cancel", headers=auth_headers(owner))
    mine = client.get(f"{API}/bookings/me", headers=auth_headers(owner))
    active_on_field = client.get(f"{API}/fields/{field.id}/bookings/me", headers=auth_headers(owner))

    assert cancel.json()["status"] == "cancelled"
    assert [booking["startTime"] for booking in mine.json()] == ["12:00", "09:00"]
    assert [booking["startTime"] for booking in active_on_field.json()] == ["12:00"]


def test_booking_detail_visible_to_owner_and_admin_only(client, make_user, make_field):
    owner = make_user()
    booking_id = _book(client, owner, make_field()).json()["id"]

    own = client.get(f"{API}/bookings/{booking_id}", headers=auth_headers(owner))
    admin_view = client.get(f"{API}/bookings/{booking_id}", headers=auth_headers(make_user(is_admin=True)))
    stranger = client.get(f"{API}/bookings/{booking_id}", headers=auth_headers(make_user()))

    assert own.status_code == 200
    assert own.json()["field"]["id"]
    assert admin_view.status_code == 200
    assert stranger.status_code == 403


def test_all_bookings_listing_is_admin_only(client, make_user, make_field):
    _book(client, make_user(), make_field())

    assert client.get(f"{API}/bookings/", headers=auth_headers(make_user())).status_code == 403
    listing = client.get(f"{API}/bookings/", headers=auth_headers(make_user(is_admin=True)))
    assert len(listing.json()) == 1


def test_status_compare_and_set_rejects_stale_expectation(client, db, make_user, make_field):
    booking_id = _book(client, make_user(), make_field()).json()["id"]

    first = booking_repository.compare_and_set_status(
        db, booking_id, expected_status="pending", new_status="confirmed"
    )
    second = booking_repository.compare_and_set_status(
        db, booking_id, expected_status="pending", new_status="rejected"
    )

    assert first is True
    assert second is False
    db.expire_all()
    assert booking_repository.get_booking_with_field(db, booking_id).status == "confirmed"


def _reschedule(client, user, booking_id, **changes):
    return client.put(f"{API}/bookings/{booking_id}", json=changes, headers=auth_headers(user))


def test_owner_reschedules_pending_booking_and_price_follows(client, make_user, make_field):
    user = make_user()
    field = make_field(price="50")
    booking_id = _book(client, user, field, start="09:00", end="10:00").json()["id"]

    response = _reschedule(client, user, booking_id, startTime="11:00", endTime="13:00")

    assert response.status_code == 200
    body = response.json()
    assert body["startTime"] == "11:00"
    assert body["endTime"] == "13:00"
    assert body["date"] == PLAY_DATE
    assert Decimal(str(body["totalPrice"])) == Decimal("100")
    assert body["status"] == "pending"


def test_reschedule_may_overlap_its_own_old_range(client, make_user, make_field):
    user = make_user()
    field = make_field()
    booking_id = _book(client, user, field, start="09:00", end="11:00").json()["id"]

    response = _reschedule(client, user, booking_id, startTime="10:00", endTime="12:00")

    assert response.status_code == 200
    assert response.json()["startTime"] == "10:00"


def test_reschedule_onto_another_booking_conflicts(client, make_user, make_field):
    user = make_user()
    field = make_field()
    assert _book(client, make_user(), field, start="14:00", end="15:00").status_code == 201
    booking_id = _book(client, user, field, start="09:00", end="10:00").json()["id"]

    response = _reschedule(client, user, booking_id, startTime="14:00", endTime="16:00")

    assert response.status_code == 409
    assert client.get(
        f"{API}/bookings/{booking_id}", headers=auth_headers(user)
    ).json()["startTime"] == "09:00"


def test_only_owner_may_reschedule(client, make_user, make_field):
    owner = make_user()
    booking_id = _book(client, owner, make_field()).json()["id"]

    response = _reschedule(client, make_user(), booking_id, startTime="12:00", endTime="13:00")

    assert response.status_code == 403


def test_confirmed_booking_cannot_be_rescheduled(client, make_user, make_field):
    owner = make_user()
    admin = make_user(is_admin=True)
    booking_id = _book(client, owner, make_field()).json()["id"]
    assert _set_status(client, admin, booking_id, "confirmed").status_code == 200

    response = _reschedule(client, owner, booking_id, startTime="12:00", endTime="13:00")

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot update confirmed or cancelled booking"


def test_reschedule_rejects_inverted_range(client, make_user, make_field):
    user = make_user()
    booking_id = _book(client, user, make_field(), start="09:00", end="10:00").json()["id"]

    response = _reschedule(client, user, booking_id, startTime="10:00")

    assert response.status_code == 400
