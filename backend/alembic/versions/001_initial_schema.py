"""Initial schema — users, planner records, checklists, peers, billing, credits, AI settings.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _owned_columns() -> list[sa.Column]:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
    ]


def _owned_table(name: str, *columns: sa.Column, **kwargs) -> None:
    op.create_table(name, *_owned_columns(), *columns, **kwargs)


def _completed() -> sa.Column:
    return sa.Column("completed", sa.Boolean, nullable=False, server_default=sa.false())


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("nav_preferences", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # ─── Planner records ─────────────────────────────────────────
    _owned_table(
        "appointments",
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("time", sa.String(5), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        _completed(),
    )
    _owned_table(
        "goals",
        sa.Column("text", sa.String(500), nullable=False),
        _completed(),
    )
    _owned_table(
        "notes",
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
    )
    _owned_table(
        "journal_entries",
        sa.Column("entry_date", sa.Date, nullable=False, index=True),
        sa.Column("content", sa.Text, nullable=False),
    )
    _owned_table(
        "routines",
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("frequency", sa.String(10), nullable=False, server_default="daily"),
        _completed(),
    )
    _owned_table(
        "travel_plans",
        sa.Column("destination", sa.String(200), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False, index=True),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.CheckConstraint("end_date >= start_date", name="ck_travel_plans_dates"),
    )
    for table in ("work_priorities", "self_development_priorities"):
        _owned_table(
            table,
            sa.Column("title", sa.String(300), nullable=False),
            sa.Column("due_date", sa.Date, nullable=True),
        )
    _owned_table(
        "expenses",
        sa.Column("description", sa.String(300), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("category", sa.String(100), nullable=False, server_default=""),
        sa.Column("expense_date", sa.Date, nullable=False, index=True),
        sa.CheckConstraint("amount >= 0", name="ck_expenses_amount"),
    )
    _owned_table(
        "recurring_expenses",
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("billing_cycle", sa.String(20), nullable=False, server_default="monthly"),
        sa.Column("next_billing_date", sa.Date, nullable=False, index=True),
        sa.Column("category", sa.String(100), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount >= 0", name="ck_recurring_expenses_amount"),
    )
    _owned_table(
        "meal_plans",
        sa.Column("day", sa.String(20), nullable=False),
        sa.Column("breakfast", sa.Text, nullable=False, server_default=""),
        sa.Column("lunch", sa.Text, nullable=False, server_default=""),
        sa.Column("dinner", sa.Text, nullable=False, server_default=""),
        sa.Column("snacks", sa.JSON, nullable=False, server_default="[]"),
    )
    for table in ("fitness_activities", "leisure_activities"):
        _owned_table(
            table,
            sa.Column("activity", sa.String(200), nullable=False),
            sa.Column("activity_date", sa.Date, nullable=False, index=True),
            _completed(),
        )
    _owned_table(
        "todos",
        sa.Column("task", sa.String(500), nullable=False),
        sa.Column("due_date", sa.Date, nullable=True, index=True),
        _completed(),
    )
    _owned_table(
        "weekly_tasks",
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("category", sa.String(100), nullable=False, server_default=""),
        sa.Column("day_of_week", sa.String(10), nullable=False),
        _completed(),
    )

    # ─── Checklists ──────────────────────────────────────────────
    _owned_table(
        "checklist_categories",
        sa.Column("category_name", sa.String(200), nullable=False),
        sa.Column("is_shared", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("share_token", sa.String(64), nullable=True, unique=True, index=True),
    )
    _owned_table(
        "checklist_items",
        sa.Column(
            "category_id", UUID(as_uuid=True),
            sa.ForeignKey("checklist_categories.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("text", sa.String(500), nullable=False),
        _completed(),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
    )

    # ─── Peers ───────────────────────────────────────────────────
    _owned_table(
        "peers",
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("status", sa.String(10), nullable=False, server_default="offline"),
        sa.Column("sync_state", sa.String(10), nullable=False, server_default="active"),
        sa.Column("active_features", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("last_synced_at", sa.DateTime(timezone=True), nullable=True),
    )
    _owned_table(
        "sync_preferences",
        sa.Column("feature", sa.String(30), nullable=False),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("user_id", "feature", name="uq_sync_preferences_user_feature"),
    )

    # ─── Billing ─────────────────────────────────────────────────
    op.create_table(
        "user_subscriptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True,
        ),
        sa.Column("stripe_customer_id", sa.String(100), nullable=True, index=True),
        sa.Column("stripe_subscription_id", sa.String(100), nullable=True, index=True),
        sa.Column("stripe_price_id", sa.String(100), nullable=True),
        sa.Column("subscription_status", sa.String(30), nullable=False, server_default="active"),
        sa.Column("plan_name", sa.String(100), nullable=False, server_default="Free Plan"),
        sa.Column("plan_type", sa.String(20), nullable=False, server_default="free"),
        sa.Column("billing_cycle", sa.String(10), nullable=False, server_default="monthly"),
        sa.Column("current_period_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancel_at_period_end", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("canceled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trial_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trial_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    _owned_table(
        "payment_history",
        sa.Column("stripe_payment_intent_id", sa.String(100), nullable=True),
        sa.Column("stripe_customer_id", sa.String(100), nullable=True),
        sa.Column("amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("currency", sa.String(10), nullable=False, server_default="usd"),
        sa.Column("payment_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("metadata", sa.JSON, nullable=False, server_default="{}"),
    )
    op.create_table(
        "stripe_events",
        sa.Column("event_id", sa.String(100), primary_key=True),
        sa.Column("event_type", sa.String(100), nullable=False, index=True),
        sa.Column("stripe_created", sa.Integer, nullable=True),
        sa.Column("received_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # ─── Credits ─────────────────────────────────────────────────
    op.create_table(
        "user_credits",
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("balance", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_purchased", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_used", sa.Integer, nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("balance >= 0", name="ck_user_credits_balance"),
    )
    _owned_table(
        "credit_transactions",
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("transaction_type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("balance_after", sa.Integer, nullable=False),
    )
    _owned_table(
        "api_usage",
        sa.Column("endpoint", sa.String(200), nullable=False),
        sa.Column("credits_used", sa.Integer, nullable=False),
        sa.Column("request_data", sa.JSON, nullable=True),
        sa.Column("response_status", sa.Integer, nullable=False, server_default="200"),
    )

    # ─── AI settings ─────────────────────────────────────────────
    op.create_table(
        "ai_settings",
        sa.Column("setting_key", sa.String(100), primary_key=True),
        sa.Column("setting_value", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    for table in (
        "ai_settings", "api_usage", "credit_transactions", "user_credits",
        "stripe_events", "payment_history", "user_subscriptions",
        "sync_preferences", "peers", "checklist_items", "checklist_categories",
        "weekly_tasks", "todos", "leisure_activities", "fitness_activities",
        "meal_plans", "recurring_expenses", "expenses", "self_development_priorities",
        "work_priorities", "travel_plans", "routines", "journal_entries", "notes",
        "goals", "appointments", "users",
    ):
        op.drop_table(table)
