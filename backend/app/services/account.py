"""Account Service — local user rows, profile summary, navigation preferences, deletion.

Invariants:
    - A verified identity maps to exactly one users row (id = identity id)
    - Role on first sight: identity user_metadata.role if it is a known role, else "user";
      afterwards users.role is authoritative
    - Deleting an account removes every owned row before the user row

Design Decisions:
    - Owned rows deleted explicitly (not only via ON DELETE CASCADE): same behavior on
      databases that do not enforce foreign keys
    - ensure_user commits on its own: it runs inside the auth dependency, before the
      route opens its own unit of work
"""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserRole
from app.infrastructure.identity_client import Identity
from app.models import (
    ApiUsage, Appointment, ChecklistCategory, ChecklistItem, CreditTransaction,
    Expense, FitnessActivity, Goal, JournalEntry, LeisureActivity, MealPlan, Note,
    PaymentRecord, Peer, RecurringExpense, Routine, SelfDevelopmentPriority,
    SyncPreference, Todo, TravelPlan, User, UserCredits, UserSubscription,
    WeeklyTask, WorkPriority,
)

logger = logging.getLogger(__name__)

# Profile counters, keyed by the resource path used in the API
COUNTED_RESOURCES = {
    "appointments": Appointment,
    "goals": Goal,
    "notes": Note,
    "journal-entries": JournalEntry,
    "routines": Routine,
    "travel-plans": TravelPlan,
    "work-priorities": WorkPriority,
    "self-development-priorities": SelfDevelopmentPriority,
    "expenses": Expense,
    "recurring-expenses": RecurringExpense,
    "meal-plans": MealPlan,
    "fitness-activities": FitnessActivity,
    "leisure-activities": LeisureActivity,
    "todos": Todo,
    "weekly-tasks": WeeklyTask,
    "checklists": ChecklistCategory,
    "peers": Peer,
}

# Children before parents
_OWNED_MODELS = (
    ChecklistItem, ChecklistCategory, SyncPreference, Peer,
    CreditTransaction, ApiUsage, UserCredits, PaymentRecord, UserSubscription,
    *COUNTED_RESOURCES.values(),
)


def _initial_role(identity: Identity) -> str:
    role = (identity.user_metadata or {}).get("role")
    if role in {r.value for r in UserRole}:
        return role
    return UserRole.USER.value


async def ensure_user(db: AsyncSession, identity: Identity) -> User:
    user = await db.get(User, identity.id)
    if user is not None:
        if identity.email and user.email != identity.email:
            user.email = identity.email
            await db.commit()
        return user

    user = User(
        id=identity.id, email=identity.email,
        role=_initial_role(identity), nav_preferences=[],
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Concurrent first request already inserted the row
        await db.rollback()
        return await db.get(User, identity.id)
    logger.info("Registered new user", extra={"user_id": str(identity.id)})
    return user


async def record_counts(db: AsyncSession, user_id: UUID) -> dict[str, int]:
    counts: dict[str, int] = {}
    for name, model in COUNTED_RESOURCES.items():
        counts[name] = await db.scalar(
            select(func.count()).select_from(model).where(model.user_id == user_id),
        ) or 0
    return counts


async def set_nav_preferences(db: AsyncSession, user: User, items: list[str]) -> User:
    # Keep first occurrence order, drop duplicates
    user.nav_preferences = list(dict.fromkeys(items))
    await db.flush()
    return user


async def delete_account(db: AsyncSession, user_id: UUID) -> None:
    for model in _OWNED_MODELS:
        await db.execute(delete(model).where(model.user_id == user_id))
    await db.execute(delete(User).where(User.id == user_id))
    await db.flush()
    logger.info("Account deleted", extra={"user_id": str(user_id)})
