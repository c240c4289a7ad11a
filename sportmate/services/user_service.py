from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from sportmate.core.exceptions import NotFound
from sportmate.models.user import User
from sportmate.repository import user_repository


class UserService:
    """Read-only lookups used to find people to chat with."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> User:
        user = user_repository.get_user(self.db, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def search_users(self, current_user: User, search: Optional[str] = None) -> List[User]:
        """Everyone matching ``search`` on name or email, except the caller."""

        return user_repository.list_users(
            self.db,
            search=search,
            exclude_user_id=current_user.id,
        )
