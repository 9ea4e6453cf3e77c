"""Checklist ORMs — categories owning ordered items, optionally shared by token.

Invariants:
    - share_token is unique when present; is_shared is True iff share_token is set
    - Items belong to exactly one category (category_id FK, cascade delete)
    - Items order by sort_order, then created_at

Design Decisions:
    - user_id denormalized onto items: owner-scoped queries without joining through category
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, OwnedRecord


class ChecklistCategory(OwnedRecord, Base):
    __tablename__ = "checklist_categories"

    category_name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_shared: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    share_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True, index=True,
    )

    items: Mapped[list["ChecklistItem"]] = relationship(
        "ChecklistItem", back_populates="category",
        cascade="all, delete-orphan", lazy="selectin",
        order_by=lambda: [ChecklistItem.sort_order, ChecklistItem.created_at],
    )


class ChecklistItem(OwnedRecord, Base):
    __tablename__ = "checklist_items"

    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("checklist_categories.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(String(500), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    category: Mapped["ChecklistCategory"] = relationship(
        "ChecklistCategory", back_populates="items",
    )
