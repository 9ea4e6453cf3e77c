"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the ownership root; every other entity is scoped by user_id

Design Decisions:
    - One file per entity (or per small family of same-shaped entities)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references and Base.metadata is complete before create_all/autogenerate
"""

from app.models.user import User  # noqa: F401
from app.models.appointment import Appointment  # noqa: F401
from app.models.goal import Goal  # noqa: F401
from app.models.note import Note  # noqa: F401
from app.models.journal_entry import JournalEntry  # noqa: F401
from app.models.routine import Routine  # noqa: F401
from app.models.travel_plan import TravelPlan  # noqa: F401
from app.models.priority import WorkPriority, SelfDevelopmentPriority  # noqa: F401
from app.models.expense import Expense, RecurringExpense  # noqa: F401
from app.models.activity import (  # noqa: F401
    MealPlan, FitnessActivity, LeisureActivity, Todo, WeeklyTask,
)
from app.models.checklist import ChecklistCategory, ChecklistItem  # noqa: F401
from app.models.peer import Peer, SyncPreference  # noqa: F401
from app.models.billing import UserSubscription, PaymentRecord, StripeEvent  # noqa: F401
from app.models.credits import UserCredits, CreditTransaction, ApiUsage  # noqa: F401
from app.models.ai_setting import AISetting  # noqa: F401
