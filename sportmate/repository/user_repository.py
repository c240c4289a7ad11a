from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from sportmate.models.user import User


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def list_users_by_ids(db: Session, user_ids: Sequence[str]) -> list[User]:
    if not user_ids:
        return []
    return db.query(User).filter(User.id.in_(list(user_ids))).all()


def list_users(
    db: Session,
    *,
    search: Optional[str] = None,
    exclude_user_id: Optional[str] = None,
) -> list[User]:
    query = db.query(User)

    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

    return query.order_by(User.name).all()


def create_user(db: Session, user_data: dict) -> User:
    user = User(**user_data)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_admin_flag(db: Session, user: User, is_admin: bool) -> User:
    user.is_admin = is_admin
    db.commit()
    db.refresh(user)
    return user
