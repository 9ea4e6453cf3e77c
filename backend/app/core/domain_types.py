"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ShareToken marks the public checklist token apart from other strings
    - All valid states encoded as Enums — no raw string matching
    - Enum values are the exact strings persisted in the database

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ShareToken = NewType("ShareToken", str)


# ─── Users ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


# ─── Planner ─────────────────────────────────────────────────────

class RoutineFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


# ─── Peers ───────────────────────────────────────────────────────

class PeerStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    PAUSED = "paused"
    BLOCKED = "blocked"


class SyncState(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    BLOCKED = "blocked"


class SyncFeature(str, Enum):
    """Features a user may share with peers."""
    CALENDAR = "calendar"
    APPOINTMENTS = "appointments"
    EXPENSES = "expenses"
    LEISURE = "leisure"
    FITNESS = "fitness"
    BIRTHDAYS = "birthdays"
    ROUTINES = "routines"
    FEED = "feed"


# ─── Billing ─────────────────────────────────────────────────────

class PlanType(str, Enum):
    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class CheckoutType(str, Enum):
    """What a Stripe Checkout session sells — stored in session metadata."""
    SUBSCRIPTION = "subscription"
    CREDITS = "credits"


class CreditTransactionType(str, Enum):
    PURCHASE = "purchase"
    USAGE = "usage"
    BONUS = "bonus"


# ─── AI ──────────────────────────────────────────────────────────

class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
