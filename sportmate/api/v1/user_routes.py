"""API routes for looking up other users."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sportmate.core.security import get_current_user
from sportmate.dependencies import get_db
from sportmate.models.user import User
from sportmate.schemas.user import UserSummary
from sportmate.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[UserSummary])
def list_users(
    *,
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Match on name or email"),
    current_user: User = Depends(get_current_user),
) -> List[UserSummary]:
    """Search other users, for example to start a direct chat."""

    service = UserService(db)
    return service.search_users(current_user, search)


@router.get("/{user_id}", response_model=UserSummary)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> UserSummary:
    service = UserService(db)
    return service.get_user(user_id)
