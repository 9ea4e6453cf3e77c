"""Travel Plan ORM — a trip between two dates.

Invariants:
    - end_date >= start_date (validated at the schema boundary)
"""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class TravelPlan(OwnedRecord, Base):
    __tablename__ = "travel_plans"

    destination: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
