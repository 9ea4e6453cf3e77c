"""Appointment ORM — dated (optionally timed) calendar entries."""

import datetime

from sqlalchemy import Boolean, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class Appointment(OwnedRecord, Base):
    __tablename__ = "appointments"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[str | None] = mapped_column(String(5), nullable=True)  # HH:MM
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
