"""Expense ORMs — one-off expenses and recurring (subscription-style) expenses.

Invariants:
    - amount is non-negative Numeric(10, 2)
    - RecurringExpense is the user's own bill tracking, unrelated to Stripe billing
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord, utcnow


class Expense(OwnedRecord, Base):
    __tablename__ = "expenses"

    description: Mapped[str] = mapped_column(String(300), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)


class RecurringExpense(OwnedRecord, Base):
    __tablename__ = "recurring_expenses"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    billing_cycle: Mapped[str] = mapped_column(String(20), nullable=False, default="monthly")
    next_billing_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
