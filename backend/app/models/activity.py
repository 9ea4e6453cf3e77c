"""Activity ORMs — meal plans, fitness and leisure activities, todos, weekly tasks.

Design Decisions:
    - Grouped in one file: each is a handful of columns with no relationships
    - snacks stored as a JSON list of strings
"""

from datetime import date

from sqlalchemy import Boolean, Date, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class MealPlan(OwnedRecord, Base):
    __tablename__ = "meal_plans"

    day: Mapped[str] = mapped_column(String(20), nullable=False)
    breakfast: Mapped[str] = mapped_column(Text, nullable=False, default="")
    lunch: Mapped[str] = mapped_column(Text, nullable=False, default="")
    dinner: Mapped[str] = mapped_column(Text, nullable=False, default="")
    snacks: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class FitnessActivity(OwnedRecord, Base):
    __tablename__ = "fitness_activities"

    activity: Mapped[str] = mapped_column(String(200), nullable=False)
    activity_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class LeisureActivity(OwnedRecord, Base):
    __tablename__ = "leisure_activities"

    activity: Mapped[str] = mapped_column(String(200), nullable=False)
    activity_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Todo(OwnedRecord, Base):
    __tablename__ = "todos"

    task: Mapped[str] = mapped_column(String(500), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class WeeklyTask(OwnedRecord, Base):
    __tablename__ = "weekly_tasks"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
