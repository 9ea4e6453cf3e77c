"""Planner Record Routes — list/create/get/update/delete for every user-scoped resource.

Invariants:
    - Every route requires an authenticated user; rows are scoped by user_id
    - Update is partial (exclude_unset); the resource's check runs on the merged row
    - Date-bearing resources accept date_from/date_to (calendar views)
    - Routes commit; RecordStore only flushes

Design Decisions:
    - RESOURCES table + build_record_router() instead of fifteen copy-pasted modules:
      resources differ only in path, model, schemas, date column and ordering
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.core.errors import RequestRejectedError
from app.infrastructure.database import get_db
from app.models import (
    Appointment, Expense, FitnessActivity, Goal, JournalEntry, LeisureActivity,
    MealPlan, Note, RecurringExpense, Routine, SelfDevelopmentPriority, Todo,
    TravelPlan, User, WeeklyTask, WorkPriority,
)
from app.schemas import records as s
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def _check_travel_dates(plan: TravelPlan) -> None:
    if plan.end_date < plan.start_date:
        raise RequestRejectedError("end_date cannot be before start_date")


@dataclass(frozen=True)
class RecordResource:
    path: str
    name: str
    model: type
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    response_schema: type[BaseModel]
    date_field: str | None = None
    order_by: Callable[[], tuple] | None = None
    check: Callable[[object], None] | None = None


RESOURCES: tuple[RecordResource, ...] = (
    RecordResource(
        "appointments", "Appointment", Appointment,
        s.AppointmentCreate, s.AppointmentUpdate, s.AppointmentResponse,
        date_field="date",
        order_by=lambda: (Appointment.date, Appointment.time),
    ),
    RecordResource(
        "goals", "Goal", Goal, s.GoalCreate, s.GoalUpdate, s.GoalResponse,
    ),
    RecordResource(
        "notes", "Note", Note, s.NoteCreate, s.NoteUpdate, s.NoteResponse,
    ),
    RecordResource(
        "journal-entries", "JournalEntry", JournalEntry,
        s.JournalEntryCreate, s.JournalEntryUpdate, s.JournalEntryResponse,
        date_field="entry_date",
        order_by=lambda: (JournalEntry.entry_date.desc(), JournalEntry.created_at.desc()),
    ),
    RecordResource(
        "routines", "Routine", Routine,
        s.RoutineCreate, s.RoutineUpdate, s.RoutineResponse,
        order_by=lambda: (Routine.created_at,),
    ),
    RecordResource(
        "travel-plans", "TravelPlan", TravelPlan,
        s.TravelPlanCreate, s.TravelPlanUpdate, s.TravelPlanResponse,
        date_field="start_date",
        order_by=lambda: (TravelPlan.start_date,),
        check=_check_travel_dates,
    ),
    RecordResource(
        "work-priorities", "WorkPriority", WorkPriority,
        s.PriorityCreate, s.PriorityUpdate, s.PriorityResponse,
        date_field="due_date",
    ),
    RecordResource(
        "self-development-priorities", "SelfDevelopmentPriority", SelfDevelopmentPriority,
        s.PriorityCreate, s.PriorityUpdate, s.PriorityResponse,
        date_field="due_date",
    ),
    RecordResource(
        "expenses", "Expense", Expense,
        s.ExpenseCreate, s.ExpenseUpdate, s.ExpenseResponse,
        date_field="expense_date",
        order_by=lambda: (Expense.expense_date.desc(), Expense.created_at.desc()),
    ),
    RecordResource(
        "recurring-expenses", "RecurringExpense", RecurringExpense,
        s.RecurringExpenseCreate, s.RecurringExpenseUpdate, s.RecurringExpenseResponse,
        date_field="next_billing_date",
        order_by=lambda: (RecurringExpense.next_billing_date,),
    ),
    RecordResource(
        "meal-plans", "MealPlan", MealPlan,
        s.MealPlanCreate, s.MealPlanUpdate, s.MealPlanResponse,
        order_by=lambda: (MealPlan.created_at,),
    ),
    RecordResource(
        "fitness-activities", "FitnessActivity", FitnessActivity,
        s.ActivityCreate, s.ActivityUpdate, s.ActivityResponse,
        date_field="activity_date",
        order_by=lambda: (FitnessActivity.activity_date.desc(),),
    ),
    RecordResource(
        "leisure-activities", "LeisureActivity", LeisureActivity,
        s.ActivityCreate, s.ActivityUpdate, s.ActivityResponse,
        date_field="activity_date",
        order_by=lambda: (LeisureActivity.activity_date.desc(),),
    ),
    RecordResource(
        "todos", "Todo", Todo, s.TodoCreate, s.TodoUpdate, s.TodoResponse,
        date_field="due_date",
    ),
    RecordResource(
        "weekly-tasks", "WeeklyTask", WeeklyTask,
        s.WeeklyTaskCreate, s.WeeklyTaskUpdate, s.WeeklyTaskResponse,
        order_by=lambda: (WeeklyTask.created_at,),
    ),
)


def _column_values(data: dict) -> dict:
    """Enum members → their stored string values."""
    return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}


def build_record_router(resource: RecordResource) -> APIRouter:
    router = APIRouter(prefix=f"/api/v1/{resource.path}", tags=[resource.path])
    Create = resource.create_schema
    Update = resource.update_schema
    Response = resource.response_schema

    def store(db: AsyncSession) -> RecordStore:
        return RecordStore(
            db, resource.model, resource.name,
            date_field=resource.date_field,
            order_by=resource.order_by() if resource.order_by else (),
        )

    @router.get("", response_model=list[Response])
    async def list_records(
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
        date_from: date | None = Query(None),
        date_to: date | None = Query(None),
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        if date_from and date_to and date_to < date_from:
            raise RequestRejectedError("date_to cannot be before date_from")
        return await store(db).list(
            user.id, limit=limit, offset=offset, date_from=date_from, date_to=date_to,
        )

    @router.post("", response_model=Response, status_code=status.HTTP_201_CREATED)
    async def create_record(
        body: Create,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        record = await store(db).create(user.id, _column_values(body.model_dump()))
        await db.commit()
        await db.refresh(record)
        return record

    @router.get("/{record_id}", response_model=Response)
    async def get_record(
        record_id: UUID,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        return await store(db).get(user.id, record_id)

    @router.patch("/{record_id}", response_model=Response)
    async def update_record(
        record_id: UUID,
        body: Update,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        record = await store(db).update(
            user.id, record_id,
            _column_values(body.model_dump(exclude_unset=True)),
            check=resource.check,
        )
        await db.commit()
        await db.refresh(record)
        return record

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_record(
        record_id: UUID,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ):
        await store(db).delete(user.id, record_id)
        await db.commit()

    return router


routers: list[APIRouter] = [build_record_router(r) for r in RESOURCES]
