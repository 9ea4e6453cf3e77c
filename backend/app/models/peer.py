"""Peer ORMs — people a user shares planner features with, and per-feature sync switches.

Invariants:
    - status ∈ {online, offline, paused, blocked}; sync_state ∈ {active, paused, blocked}
    - At most one SyncPreference row per (user_id, feature)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, OwnedRecord


class Peer(OwnedRecord, Base):
    __tablename__ = "peers"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="offline")
    sync_state: Mapped[str] = mapped_column(String(10), nullable=False, default="active")
    active_features: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    last_synced_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )


class SyncPreference(OwnedRecord, Base):
    __tablename__ = "sync_preferences"
    __table_args__ = (
        UniqueConstraint("user_id", "feature", name="uq_sync_preferences_user_feature"),
    )

    feature: Mapped[str] = mapped_column(String(30), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
