"""Peer Service — peer records, sync toggling and per-feature sync preferences.

Invariants:
    - Toggle flips active ↔ paused; blocked peers are returned unchanged
    - Resuming sync stamps last_synced_at
    - Preference reads are defaults overlaid with stored rows; writes upsert one row per feature
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import SyncFeature, SyncState
from app.core.planner_rules import merge_sync_preferences, toggled_sync
from app.models import Peer, SyncPreference
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def peer_store(db: AsyncSession) -> RecordStore:
    return RecordStore(db, Peer, "Peer", order_by=(Peer.name,))


async def toggle_sync(db: AsyncSession, user_id: UUID, peer_id: UUID) -> Peer:
    peer = await peer_store(db).get(user_id, peer_id)
    transition = toggled_sync(peer.sync_state)
    if transition is None:
        logger.info(f"Sync toggle ignored for blocked peer {peer.id}")
        return peer
    sync_state, status = transition
    peer.sync_state = sync_state.value
    peer.status = status.value
    if sync_state == SyncState.ACTIVE:
        peer.last_synced_at = datetime.now(timezone.utc)
    await db.flush()
    return peer


async def get_sync_preferences(db: AsyncSession, user_id: UUID) -> dict[str, bool]:
    result = await db.execute(
        select(SyncPreference).where(SyncPreference.user_id == user_id),
    )
    stored = {row.feature: row.enabled for row in result.scalars().all()}
    return merge_sync_preferences(stored)


async def set_sync_preferences(
    db: AsyncSession, user_id: UUID, preferences: dict[SyncFeature, bool],
) -> dict[str, bool]:
    result = await db.execute(
        select(SyncPreference).where(SyncPreference.user_id == user_id),
    )
    existing = {row.feature: row for row in result.scalars().all()}
    for feature, enabled in preferences.items():
        row = existing.get(feature.value)
        if row is None:
            db.add(SyncPreference(user_id=user_id, feature=feature.value, enabled=enabled))
        else:
            row.enabled = enabled
    await db.flush()
    return await get_sync_preferences(db, user_id)
