from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from sportmate.schemas.base import CamelModel


class FieldBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=255)
    sport: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    contact_phone: Optional[str] = Field(None, max_length=30)
    contact_email: Optional[str] = Field(None, max_length=255)


class FieldCreate(FieldBase):
    pass


class FieldUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    sport: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    images: Optional[List[str]] = None
    contact_phone: Optional[str] = Field(None, max_length=30)
    contact_email: Optional[str] = Field(None, max_length=255)
    is_available: Optional[bool] = None


class FieldResponse(FieldBase):
    id: str
    is_available: bool
    created_at: datetime
    updated_at: datetime


class TimeSlotResponse(CamelModel):
    id: str
    start_time: str
    end_time: str
    is_booked: bool


class DayAvailability(CamelModel):
    date: date
    slots: List[TimeSlotResponse]


class FieldWithAvailability(FieldResponse):
    availability: List[DayAvailability]


class FieldPage(CamelModel):
    data: List[FieldResponse]
    total: int
    page: int
    last_page: int
