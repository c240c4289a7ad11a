from datetime import datetime, timedelta, timezone

from helpers import API
from jose import jwt

from sportmate.core.config import settings
from sportmate.core.security import create_access_token
from sportmate.repository import user_repository


def _headers(token):
    return {"Authorization": f"Bearer {token}"}


def _raw_token(claims):
    claims = {**claims, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def test_is_admin_claim_grants_admin_routes(client, make_user, db):
    user = make_user()
    assert user.is_admin is False

    response = client.get(f"{API}/bookings/", headers=_headers(create_access_token(user.id, is_admin=True)))

    assert response.status_code == 200
    assert user_repository.get_user(db, user.id).is_admin is True


def test_role_claim_grants_admin_routes(client, make_user):
    user = make_user()

    response = client.get(f"{API}/bookings/", headers=_headers(_raw_token({"sub": user.id, "role": "admin"})))

    assert response.status_code == 200


def test_claims_can_revoke_admin(client, make_user, db):
    admin = make_user(is_admin=True)

    response = client.get(
        f"{API}/bookings/", headers=_headers(_raw_token({"sub": admin.id, "role": "player"}))
    )

    assert response.status_code == 403
    assert user_repository.get_user(db, admin.id).is_admin is False


def test_token_without_role_claims_keeps_stored_flag(client, make_user):
    admin, player = make_user(is_admin=True), make_user()

    as_admin = client.get(f"{API}/bookings/", headers=_headers(_raw_token({"sub": admin.id})))
    as_player = client.get(f"{API}/bookings/", headers=_headers(_raw_token({"id": player.id})))

    assert as_admin.status_code == 200
    assert as_player.status_code == 403


def test_tampered_or_unknown_tokens_are_rejected(client, make_user):
    user = make_user()
    forged = jwt.encode({"sub": user.id}, "another-secret", algorithm=settings.ALGORITHM)

    assert client.get(f"{API}/bookings/me", headers=_headers(forged)).status_code == 401
    assert client.get(
        f"{API}/bookings/me", headers=_headers(create_access_token("nobody"))
    ).status_code == 401
