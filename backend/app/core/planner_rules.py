"""Planner Rules — small pure rules shared by planner records, checklists and peers.

Invariants:
    - A todo is overdue only when it has a due date, is not completed, and the date is past
    - Share tokens are 32 characters drawn from [A-Za-z0-9]
    - Blocked peers never change sync state through a toggle
"""

import secrets
import string
from datetime import date

from app.core.domain_types import PeerStatus, ShareToken, SyncFeature, SyncState

SHARE_TOKEN_LENGTH = 32
_TOKEN_ALPHABET = string.ascii_letters + string.digits

DEFAULT_SYNC_PREFERENCES: dict[SyncFeature, bool] = {
    SyncFeature.CALENDAR: True,
    SyncFeature.APPOINTMENTS: True,
    SyncFeature.EXPENSES: False,
    SyncFeature.LEISURE: True,
    SyncFeature.FITNESS: True,
    SyncFeature.BIRTHDAYS: True,
    SyncFeature.ROUTINES: False,
    SyncFeature.FEED: True,
}


def is_overdue(due_date: date | None, completed: bool, today: date) -> bool:
    return due_date is not None and not completed and due_date < today


def generate_share_token() -> ShareToken:
    return ShareToken(
        "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(SHARE_TOKEN_LENGTH)),
    )


def toggled_sync(sync_state: str) -> tuple[SyncState, PeerStatus] | None:
    """Next (sync_state, status) after a pause/resume toggle; None when blocked."""
    if sync_state == SyncState.BLOCKED.value:
        return None
    if sync_state == SyncState.PAUSED.value:
        return SyncState.ACTIVE, PeerStatus.ONLINE
    return SyncState.PAUSED, PeerStatus.PAUSED


def merge_sync_preferences(stored: dict[str, bool]) -> dict[str, bool]:
    """Stored per-feature flags layered over the defaults."""
    merged = {feature.value: enabled for feature, enabled in DEFAULT_SYNC_PREFERENCES.items()}
    merged.update({k: v for k, v in stored.items() if k in merged})
    return merged
