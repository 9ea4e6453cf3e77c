"""Journal Entry ORM — one dated journal text.

Invariants:
    - Several entries may share an entry_date (no uniqueness per day)
"""

from datetime import date

from sqlalchemy import Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class JournalEntry(OwnedRecord, Base):
    __tablename__ = "journal_entries"

    entry_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
