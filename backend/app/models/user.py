"""User ORM — local mirror of an identity-service account.

Invariants:
    - id equals the identity service's user id (no server-side default)
    - role is one of: user, admin
    - nav_preferences holds the user's ordered navigation item ids

Design Decisions:
    - Created lazily on the first authenticated request (see api/dependencies.py)
    - Owned rows reference users.id with ON DELETE CASCADE
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, utcnow


class User(Base):
    """Application user (authentication handled by the identity service)."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    nav_preferences: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
