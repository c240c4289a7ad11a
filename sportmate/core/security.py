"""Bearer-token helpers for tokens issued by the identity service."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from sportmate.core.config import settings
from sportmate.core.exceptions import Forbidden, Unauthorized
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.repository import user_repository

bearer_scheme = HTTPBearer(auto_error=False)
LOGGER = logging.getLogger(__name__)


class TokenDecodeError(RuntimeError):
    """Raised when an access token cannot be decoded."""


def create_access_token(
    user_id: str,
    *,
    is_admin: bool = False,
    expires_minutes: Optional[int] = None,
) -> str:
    """Issue a token with the claims this service expects.

    Token issuance belongs to the identity service; this helper exists for
    local tooling and tests.
    """

    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {"sub": user_id, "is_admin": is_admin, "exp": expire}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode a JWT access token using the shared auth secret."""

    if not token:
        raise TokenDecodeError("Token must not be empty")

    normalized = token.strip()
    if normalized.lower().startswith("bearer "):
        normalized = normalized[7:].strip()

    try:
        return jwt.decode(
            normalized,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError as exc:
        LOGGER.info("Rejected access token: %s", exc)
        raise TokenDecodeError("Invalid or expired token") from exc


def _admin_claim(payload: Dict[str, Any]) -> Optional[bool]:
    """Admin status carried by the token, or ``None`` when it carries no role claim."""

    if "is_admin" not in payload and "role" not in payload:
        return None
    return payload.get("is_admin") is True or payload.get("role") == "admin"


def resolve_user(db: Session, token: str) -> User:
    """Return the persisted user a token refers to."""

    try:
        payload = decode_access_token(token)
    except TokenDecodeError as exc:
        raise Unauthorized("Could not validate credentials") from exc

    user_id = payload.get("sub") or payload.get("id")
    if not user_id:
        raise Unauthorized("Could not validate credentials")

    user = user_repository.get_user(db, str(user_id))
    if user is None:
        LOGGER.warning("Token subject %s does not match a known user", user_id)
        raise Unauthorized("User not found")

    # The identity service owns roles; the stored flag mirrors its claims.
    claimed_admin = _admin_claim(payload)
    if claimed_admin is not None and claimed_admin != bool(user.is_admin):
        LOGGER.info("Syncing admin flag of user %s to %s from token claims", user.id, claimed_admin)
        user = user_repository.set_admin_flag(db, user, claimed_admin)

    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Validate the bearer token and load the calling user."""

    if credentials is None or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Not authenticated")

    return resolve_user(db, credentials.credentials)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise Forbidden("Admin privileges required")
    return current_user


__all__ = [
    "TokenDecodeError",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "require_admin",
    "resolve_user",
]
