"""SQLAlchemy Declarative Base — shared base class and ownership columns for all ORM models.

Invariants:
    - All models inherit from Base
    - Every user-owned row has id (UUID), user_id (FK users.id, cascade) and created_at

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - OwnedRecord mixin instead of repeating the three ownership columns in every entity
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.dialects.postgresql import UUID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all Task Manager ORM models."""
    pass


class OwnedRecord:
    """Mixin for rows scoped to a single user."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )

    @declared_attr
    def user_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            UUID(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False, index=True,
        )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
