"""Pydantic schemas for booking resources."""

from datetime import date, datetime, time
from datetime import date as Date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, field_serializer

from sportmate.schemas.base import CamelModel
from sportmate.schemas.field import FieldResponse
from sportmate.schemas.user import UserSummary


class BookingCreate(CamelModel):
    """Times are ``HH:MM`` strings on whole hours."""

    field_id: str = Field(..., min_length=1)
    date: date
    start_time: str = Field(..., min_length=4, max_length=8)
    end_time: str = Field(..., min_length=4, max_length=8)


class BookingUpdate(CamelModel):
    """Reschedule a pending booking; omitted fields keep their value."""

    date: Optional[Date] = None
    start_time: Optional[str] = Field(None, min_length=4, max_length=8)
    end_time: Optional[str] = Field(None, min_length=4, max_length=8)


class BookingStatusUpdate(CamelModel):
    status: Literal["confirmed", "rejected", "cancelled"]


class BookingResponse(CamelModel):
    id: str
    user_id: str
    field_id: str
    date: date
    start_time: time
    end_time: time
    total_price: Decimal
    status: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("start_time", "end_time")
    def _serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class BookingDetail(BookingResponse):
    field: FieldResponse
    user: UserSummary
