"""Planner Rules — verifies overdue detection, share tokens and sync toggles."""

import re
from datetime import date

from app.core.domain_types import PeerStatus, SyncState
from app.core.planner_rules import (
    SHARE_TOKEN_LENGTH, generate_share_token, is_overdue,
    merge_sync_preferences, toggled_sync,
)

TODAY = date(2026, 5, 10)


def test_past_due_incomplete_is_overdue():
    assert is_overdue(date(2026, 5, 9), False, TODAY)


def test_due_today_is_not_overdue():
    assert not is_overdue(TODAY, False, TODAY)


def test_completed_is_never_overdue():
    assert not is_overdue(date(2020, 1, 1), True, TODAY)


def test_no_due_date_is_not_overdue():
    assert not is_overdue(None, False, TODAY)


def test_share_token_shape():
    token = generate_share_token()
    assert len(token) == SHARE_TOKEN_LENGTH
    assert re.fullmatch(r"[A-Za-z0-9]+", token)


def test_share_tokens_differ():
    assert generate_share_token() != generate_share_token()


def test_toggle_active_pauses():
    assert toggled_sync("active") == (SyncState.PAUSED, PeerStatus.PAUSED)


def test_toggle_paused_resumes():
    assert toggled_sync("paused") == (SyncState.ACTIVE, PeerStatus.ONLINE)


def test_toggle_blocked_is_noop():
    assert toggled_sync("blocked") is None


def test_merge_sync_preferences_overrides_defaults():
    merged = merge_sync_preferences({"expenses": True, "calendar": False, "bogus": True})
    assert merged["expenses"] is True
    assert merged["calendar"] is False
    assert "bogus" not in merged
    assert merged["routines"] is False
