from __future__ import annotations

from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from sportmate.models.field import Field


def get_field(db: Session, field_id: str) -> Optional[Field]:
    return db.query(Field).filter(Field.id == field_id).first()


def list_fields(
    db: Session,
    *,
    sport: Optional[str] = None,
    location: Optional[str] = None,
    offset: int = 0,
    limit: int = 10,
) -> Tuple[list[Field], int]:
    query = db.query(Field)

    if sport is not None:
        query = query.filter(Field.sport == sport)
    if location:
        query = query.filter(func.lower(Field.location).contains(location.lower()))

    total = query.count()
    fields = query.order_by(Field.created_at.desc()).offset(offset).limit(limit).all()
    return fields, total


def create_field(db: Session, field_data: dict) -> Field:
    field = Field(**field_data)
    db.add(field)
    db.commit()
    db.refresh(field)
    return field


def save_field(db: Session, field: Field) -> Field:
    db.flush()
    db.commit()
    db.refresh(field)
    return field


def delete_field(db: Session, field: Field) -> None:
    db.delete(field)
    db.commit()
