from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sportmate.core.config import settings
from sportmate.core.exceptions import NotFound
from sportmate.models.field import Field
from sportmate.repository import booking_repository, field_repository
from sportmate.schemas.field import FieldCreate, FieldUpdate
from sportmate.services.availability import build_availability

logger = logging.getLogger(__name__)


class FieldService:
    def __init__(self, db: Session):
        self.db = db

    def get_field(self, field_id: str) -> Field:
        field = field_repository.get_field(self.db, field_id)
        if field is None:
            raise NotFound("Field not found")
        return field

    def list_fields(
        self,
        *,
        sport: Optional[str] = None,
        location: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Field], int, int]:
        fields, total = field_repository.list_fields(
            self.db,
            sport=sport,
            location=location,
            offset=(page - 1) * limit,
            limit=limit,
        )
        last_page = math.ceil(total / limit) if total else 0
        return fields, total, last_page

    def get_field_with_availability(
        self,
        field_id: str,
        *,
        today: Optional[date] = None,
    ) -> Tuple[Field, List[dict]]:
        """Return the field and its slot calendar starting at ``today``."""

        field = self.get_field(field_id)
        start = today or date.today()
        end = start + timedelta(days=settings.AVAILABILITY_DAYS - 1)

        bookings = booking_repository.list_active_bookings_in_window(
            self.db,
            field_id=field.id,
            start_date=start,
            end_date=end,
        )
        return field, build_availability(bookings, start)

    def create_field(self, payload: FieldCreate) -> Field:
        field_data = payload.model_dump()
        field_data["is_available"] = True
        field = field_repository.create_field(self.db, field_data)
        logger.info("Field %s created (%s)", field.id, field.name)
        return field

    def update_field(self, field_id: str, payload: FieldUpdate) -> Field:
        field = self.get_field(field_id)
        update_data = payload.model_dump(exclude_unset=True)

        for attribute, value in update_data.items():
            setattr(field, attribute, value)

        return field_repository.save_field(self.db, field)

    def delete_field(self, field_id: str) -> None:
        field = self.get_field(field_id)
        field_repository.delete_field(self.db, field)
        logger.info("Field %s deleted", field_id)
