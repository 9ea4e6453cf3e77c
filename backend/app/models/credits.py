"""Credit ORMs — per-user balance, signed transaction ledger, and metered API usage.

Invariants:
    - balance >= 0 at all times (deductions check before writing)
    - balance == total_purchased - total_used (bonus credits count as purchased)
    - CreditTransaction.amount is positive for purchase/bonus, negative for usage
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base, OwnedRecord, utcnow


class UserCredits(Base):
    __tablename__ = "user_credits"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_purchased: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )


class CreditTransaction(OwnedRecord, Base):
    __tablename__ = "credit_transactions"

    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    balance_after: Mapped[int] = mapped_column(Integer, nullable=False)


class ApiUsage(OwnedRecord, Base):
    __tablename__ = "api_usage"

    endpoint: Mapped[str] = mapped_column(String(200), nullable=False)
    credits_used: Mapped[int] = mapped_column(Integer, nullable=False)
    request_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    response_status: Mapped[int] = mapped_column(Integer, nullable=False, default=200)
