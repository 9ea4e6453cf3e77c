"""Planner Search — case-insensitive substring search across the caller's records.

Invariants:
    - Only the caller's rows are searched
    - A blank query returns no results (never "everything")
    - LIKE wildcards in the query are matched literally
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    Appointment, FitnessActivity, LeisureActivity, Note, Todo, WeeklyTask,
)

logger = logging.getLogger(__name__)

PER_TYPE_LIMIT = 20


def _pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def _find(db: AsyncSession, model, user_id: UUID, *conditions) -> list:
    result = await db.execute(
        select(model)
        .where(model.user_id == user_id, or_(*conditions))
        .order_by(model.created_at.desc())
        .limit(PER_TYPE_LIMIT),
    )
    return list(result.scalars().all())


async def search_records(db: AsyncSession, user_id: UUID, query: str) -> list[dict]:
    query = query.strip()
    if not query:
        return []
    like = _pattern(query)

    def match(column):
        return column.ilike(like, escape="\\")

    results: list[dict] = []

    for task in await _find(db, WeeklyTask, user_id, match(WeeklyTask.title), match(WeeklyTask.category)):
        results.append({
            "type": "weekly_task", "id": task.id, "title": task.title,
            "category": task.category or None, "day_of_week": task.day_of_week,
            "completed": task.completed,
        })

    for todo in await _find(db, Todo, user_id, match(Todo.task)):
        results.append({
            "type": "todo", "id": todo.id, "title": todo.task,
            "date": todo.due_date, "completed": todo.completed,
        })

    for appt in await _find(
        db, Appointment, user_id, match(Appointment.title), match(Appointment.description),
    ):
        results.append({
            "type": "appointment", "id": appt.id, "title": appt.title,
            "date": appt.date, "time": appt.time, "completed": appt.completed,
        })

    for kind, model in (("fitness", FitnessActivity), ("leisure", LeisureActivity)):
        for activity in await _find(db, model, user_id, match(model.activity)):
            results.append({
                "type": kind, "id": activity.id, "title": activity.activity,
                "date": activity.activity_date, "completed": activity.completed,
            })

    for note in await _find(db, Note, user_id, match(Note.title), match(Note.content)):
        results.append({"type": "note", "id": note.id, "title": note.title})

    logger.debug(f"Search matched {len(results)} records", extra={"user_id": str(user_id)})
    return results
