"""Goal ORM — a short goal statement with a completion flag."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class Goal(OwnedRecord, Base):
    __tablename__ = "goals"

    text: Mapped[str] = mapped_column(String(500), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
