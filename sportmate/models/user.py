"""SQLAlchemy model mirroring the identity service's users."""

from sqlalchemy import Boolean, Column, DateTime, String

from sportmate.core.database import Base
from sportmate.models.base import generate_id, utcnow


class User(Base):
    """Represents a user issued by the authentication service."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User(id={self.id}, email={self.email})>"
