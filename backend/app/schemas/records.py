"""Planner Record Schemas — create/update/response contracts for every user-scoped resource.

Invariants:
    - Required text fields are stripped and non-empty
    - Update schemas are partial: only fields sent by the client are applied
    - An explicit null is accepted only for columns that are nullable (NULLABLE)
    - Responses never expose user_id (ownership is implied by the bearer token)

Design Decisions:
    - One Create/Update/Response triple per resource, consumed by the router factory
      in api/routes/records.py
    - Annotated string aliases over per-model field_validators: same rule, one place
"""

import datetime as dt
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, ClassVar
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, StringConstraints, computed_field, model_validator,
)

from app.core.domain_types import DayOfWeek, RoutineFrequency
from app.core.planner_rules import is_overdue

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
ShortText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]
LongText = Annotated[str, StringConstraints(max_length=20_000)]
ClockTime = Annotated[str, StringConstraints(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class RecordUpdate(BaseModel):
    """Partial update base — rejects null for non-nullable columns."""
    NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.NULLABLE:
                raise ValueError(f"{name} cannot be null")
        return self


class RecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


# ─── Appointments ────────────────────────────────────────────────

class AppointmentCreate(BaseModel):
    title: Title
    date: dt.date
    time: ClockTime | None = None
    description: LongText | None = None
    completed: bool = False


class AppointmentUpdate(RecordUpdate):
    NULLABLE = frozenset({"time", "description"})
    title: Title | None = None
    date: dt.date | None = None
    time: ClockTime | None = None
    description: LongText | None = None
    completed: bool | None = None


class AppointmentResponse(RecordResponse):
    title: str
    date: dt.date
    time: str | None
    description: str | None
    completed: bool


# ─── Goals ───────────────────────────────────────────────────────

class GoalCreate(BaseModel):
    text: Title
    completed: bool = False


class GoalUpdate(RecordUpdate):
    text: Title | None = None
    completed: bool | None = None


class GoalResponse(RecordResponse):
    text: str
    completed: bool


# ─── Notes ───────────────────────────────────────────────────────

class NoteCreate(BaseModel):
    title: Title
    content: LongText = ""


class NoteUpdate(RecordUpdate):
    title: Title | None = None
    content: LongText | None = None


class NoteResponse(RecordResponse):
    title: str
    content: str


# ─── Journal ─────────────────────────────────────────────────────

class JournalEntryCreate(BaseModel):
    entry_date: date
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20_000)]


class JournalEntryUpdate(RecordUpdate):
    entry_date: date | None = None
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20_000)] | None = None


class JournalEntryResponse(RecordResponse):
    entry_date: date
    content: str


# ─── Routines ────────────────────────────────────────────────────

class RoutineCreate(BaseModel):
    name: Title
    frequency: RoutineFrequency = RoutineFrequency.DAILY
    completed: bool = False


class RoutineUpdate(RecordUpdate):
    name: Title | None = None
    frequency: RoutineFrequency | None = None
    completed: bool | None = None


class RoutineResponse(RecordResponse):
    name: str
    frequency: RoutineFrequency
    completed: bool


# ─── Travel ──────────────────────────────────────────────────────

class TravelPlanCreate(BaseModel):
    destination: Title
    start_date: date
    end_date: date
    notes: LongText | None = None

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class TravelPlanUpdate(RecordUpdate):
    NULLABLE = frozenset({"notes"})
    destination: Title | None = None
    start_date: date | None = None
    end_date: date | None = None
    notes: LongText | None = None


class TravelPlanResponse(RecordResponse):
    destination: str
    start_date: date
    end_date: date
    notes: str | None


# ─── Priorities (work + self-development) ────────────────────────

class PriorityCreate(BaseModel):
    title: Title
    due_date: date | None = None


class PriorityUpdate(RecordUpdate):
    NULLABLE = frozenset({"due_date"})
    title: Title | None = None
    due_date: date | None = None


class PriorityResponse(RecordResponse):
    title: str
    due_date: date | None


# ─── Expenses ────────────────────────────────────────────────────

class ExpenseCreate(BaseModel):
    description: Title
    amount: Money
    category: ShortText = ""
    expense_date: date


class ExpenseUpdate(RecordUpdate):
    description: Title | None = None
    amount: Money | None = None
    category: ShortText | None = None
    expense_date: date | None = None


class ExpenseResponse(RecordResponse):
    description: str
    amount: float
    category: str
    expense_date: date


class RecurringExpenseCreate(BaseModel):
    name: Title
    amount: Money
    billing_cycle: ShortText = "monthly"
    next_billing_date: date
    category: ShortText = ""
    is_active: bool = True
    notes: LongText | None = None


class RecurringExpenseUpdate(RecordUpdate):
    NULLABLE = frozenset({"notes"})
    name: Title | None = None
    amount: Money | None = None
    billing_cycle: ShortText | None = None
    next_billing_date: date | None = None
    category: ShortText | None = None
    is_active: bool | None = None
    notes: LongText | None = None


class RecurringExpenseResponse(RecordResponse):
    name: str
    amount: float
    billing_cycle: str
    next_billing_date: date
    category: str
    is_active: bool
    notes: str | None
    updated_at: datetime


# ─── Meal planning ───────────────────────────────────────────────

class MealPlanCreate(BaseModel):
    day: DayOfWeek
    breakfast: LongText = ""
    lunch: LongText = ""
    dinner: LongText = ""
    snacks: list[Title] = Field(default_factory=list, max_length=50)


class MealPlanUpdate(RecordUpdate):
    day: DayOfWeek | None = None
    breakfast: LongText | None = None
    lunch: LongText | None = None
    dinner: LongText | None = None
    snacks: list[Title] | None = Field(None, max_length=50)


class MealPlanResponse(RecordResponse):
    day: DayOfWeek
    breakfast: str
    lunch: str
    dinner: str
    snacks: list[str]


# ─── Fitness & leisure ───────────────────────────────────────────

class ActivityCreate(BaseModel):
    activity: Title
    activity_date: date
    completed: bool = False


class ActivityUpdate(RecordUpdate):
    activity: Title | None = None
    activity_date: date | None = None
    completed: bool | None = None


class ActivityResponse(RecordResponse):
    activity: str
    activity_date: date
    completed: bool


# ─── Todos ───────────────────────────────────────────────────────

class TodoCreate(BaseModel):
    task: Title
    due_date: date | None = None
    completed: bool = False


class TodoUpdate(RecordUpdate):
    NULLABLE = frozenset({"due_date"})
    task: Title | None = None
    due_date: date | None = None
    completed: bool | None = None


class TodoResponse(RecordResponse):
    task: str
    due_date: date | None
    completed: bool

    @computed_field
    @property
    def is_overdue(self) -> bool:
        return is_overdue(self.due_date, self.completed, date.today())


# ─── Weekly tasks ────────────────────────────────────────────────

class WeeklyTaskCreate(BaseModel):
    title: Title
    category: ShortText = ""
    day_of_week: DayOfWeek
    completed: bool = False


class WeeklyTaskUpdate(RecordUpdate):
    title: Title | None = None
    category: ShortText | None = None
    day_of_week: DayOfWeek | None = None
    completed: bool | None = None


class WeeklyTaskResponse(RecordResponse):
    title: str
    category: str
    day_of_week: DayOfWeek
    completed: bool
