"""Routine ORM — a recurring habit grouped by frequency."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class Routine(OwnedRecord, Base):
    __tablename__ = "routines"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    frequency: Mapped[str] = mapped_column(String(10), nullable=False, default="daily")
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
