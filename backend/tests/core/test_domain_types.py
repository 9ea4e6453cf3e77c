"""Domain Types — verifies enum values match the strings persisted in the database.

Tests:
    - NewType wrappers are transparent
    - Enums serialize to their stored value
    - Sync features are the closed set the peer preferences page offers
"""

from app.core.domain_types import (
    CheckoutType, DayOfWeek, PeerStatus, PlanType, SyncFeature, SyncState,
    ShareToken, UserRole,
)


def test_share_token_wraps_str():
    assert ShareToken("abc") == "abc"


def test_roles():
    assert {r.value for r in UserRole} == {"user", "admin"}


def test_sync_features_closed_set():
    assert {f.value for f in SyncFeature} == {
        "calendar", "appointments", "expenses", "leisure",
        "fitness", "birthdays", "routines", "feed",
    }


def test_blocked_is_both_a_sync_state_and_a_status():
    assert SyncState.BLOCKED.value == PeerStatus.BLOCKED.value
    assert {s.value for s in SyncState} - {p.value for p in PeerStatus} == {"active"}


def test_plan_types():
    assert [p.value for p in PlanType] == ["free", "basic", "premium", "enterprise"]


def test_day_of_week_capitalized():
    assert DayOfWeek.MONDAY.value == "Monday"
    assert len(DayOfWeek) == 7


def test_checkout_type_is_str_enum():
    assert CheckoutType("credits") is CheckoutType.CREDITS
    assert CheckoutType.SUBSCRIPTION == "subscription"
