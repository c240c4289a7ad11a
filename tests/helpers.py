from sportmate.core.config import settings
from sportmate.core.security import create_access_token

API = settings.API_PREFIX


def auth_headers(user) -> dict:
    token = create_access_token(user.id, is_admin=bool(user.is_admin))
    return {"Authorization": f"Bearer {token}"}


def token_for(user) -> str:
    return create_access_token(user.id, is_admin=bool(user.is_admin))
