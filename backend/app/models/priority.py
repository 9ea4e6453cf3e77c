"""Priority ORMs — work and self-development priorities share one shape.

Design Decisions:
    - Two tables (not one with a kind column): mirrors the two separate screens,
      and each list is queried on its own
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class WorkPriority(OwnedRecord, Base):
    __tablename__ = "work_priorities"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)


class SelfDevelopmentPriority(OwnedRecord, Base):
    __tablename__ = "self_development_priorities"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
