from datetime import date, timedelta

from helpers import API, auth_headers


def test_field_detail_includes_thirty_day_calendar(client, make_user, make_field):
    field = make_field()
    user = make_user()
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    client.post(
        f"{API}/bookings/",
        json={"fieldId": field.id, "date": tomorrow, "startTime": "09:00", "endTime": "10:00"},
        headers=auth_headers(user),
    )

    response = client.get(f"{API}/fields/{field.id}")

    assert response.status_code == 200
    body = response.json()
    availability = body["availability"]
    assert body["id"] == field.id
    assert len(availability) == 30
    assert availability[0]["date"] == date.today().isoformat()
    assert all(len(day["slots"]) == 13 for day in availability)

    first_slot = availability[1]["slots"][0]
    assert first_slot == {
        "id": f"{tomorrow}-0",
        "startTime": "09:00",
        "endTime": "10:00",
        "isBooked": True,
    }
    assert not any(slot["isBooked"] for slot in availability[0]["slots"])


def test_calendar_frees_cancelled_slot(client, make_user, make_field):
    field = make_field()
    user = make_user()
    day = date.today().isoformat()
    booking = client.post(
        f"{API}/bookings/",
        json={"fieldId": field.id, "date": day, "startTime": "20:00", "endTime": "21:00"},
        headers=auth_headers(user),
    ).json()
    client.patch(f"{API}/bookings/{booking['id']}/cancel", headers=auth_headers(user))

    slots = client.get(f"{API}/fields/{field.id}").json()["availability"][0]["slots"]

    assert not any(slot["isBooked"] for slot in slots)


def test_missing_field_is_not_found(client):
    response = client.get(f"{API}/fields/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"detail": "Field not found"}


def test_field_listing_filters_and_paginates(client, make_field):
    make_field(sport="football", location="Miraflores, Lima")
    make_field(sport="football", location="Cusco")
    make_field(sport="tennis", location="San Isidro, LIMA")

    football = client.get(f"{API}/fields/", params={"sport": "football"}).json()
    in_lima = client.get(f"{API}/fields/", params={"location": "lima"}).json()
    paged = client.get(f"{API}/fields/", params={"page": 2, "limit": 2}).json()

    assert football["total"] == 2
    assert in_lima["total"] == 2
    assert paged["page"] == 2
    assert paged["lastPage"] == 2
    assert len(paged["data"]) == 1


def test_field_management_is_admin_only(client, make_user):
    admin = make_user(is_admin=True)
    payload = {"name": "Cancha 1", "location": "Lima", "sport": "football", "price": "120"}

    refused = client.post(f"{API}/fields/", json=payload, headers=auth_headers(make_user()))
    created = client.post(f"{API}/fields/", json=payload, headers=auth_headers(admin))
    field_id = created.json()["id"]
    updated = client.put(
        f"{API}/fields/{field_id}",
        json={"isAvailable": False},
        headers=auth_headers(admin),
    )
    deleted = client.delete(f"{API}/fields/{field_id}", headers=auth_headers(admin))

    assert refused.status_code == 403
    assert created.status_code == 201
    assert created.json()["isAvailable"] is True
    assert updated.json()["isAvailable"] is False
    assert deleted.status_code == 204
    assert client.get(f"{API}/fields/{field_id}").status_code == 404


def test_health_check(client):
    assert client.get("/health").json() == {"status": "ok"}
