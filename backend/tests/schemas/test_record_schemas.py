"""Record and billing schemas — validation rules enforced before any route runs.

Invariants:
    - Partial updates reject null for non-nullable fields, accept it for nullable ones
    - Travel plans cannot end before they start
    - Checkout requests carry the payload matching their type
"""

from datetime import date

import pytest
from pydantic import ValidationError

from app.core.domain_types import CheckoutType
from app.schemas.billing import CheckoutRequest
from app.schemas.records import (
    AppointmentUpdate, NoteCreate, TodoResponse, TodoUpdate, TravelPlanCreate,
)


# --- Partial updates ----------------------------------------------------------

def test_update_tracks_only_sent_fields():
    update = TodoUpdate(completed=True)
    assert update.model_dump(exclude_unset=True) == {"completed": True}


def test_update_rejects_null_required_field():
    with pytest.raises(ValidationError, match="task cannot be null"):
        TodoUpdate(task=None)


def test_update_accepts_null_nullable_field():
    assert AppointmentUpdate(time=None).model_dump(exclude_unset=True) == {"time": None}


# --- Text rules ---------------------------------------------------------------

def test_title_is_stripped():
    assert NoteCreate(title="  Ideas  ").title == "Ideas"


def test_title_max_length():
    with pytest.raises(ValidationError):
        NoteCreate(title="x" * 201)


# --- Travel -------------------------------------------------------------------

def test_travel_plan_same_day_allowed():
    plan = TravelPlanCreate(destination="Porto", start_date=date(2026, 7, 1), end_date=date(2026, 7, 1))
    assert plan.end_date == plan.start_date


def test_travel_plan_end_before_start():
    with pytest.raises(ValidationError, match="end_date cannot be before start_date"):
        TravelPlanCreate(destination="Porto", start_date=date(2026, 7, 2), end_date=date(2026, 7, 1))


# --- Todo overdue flag --------------------------------------------------------

def test_todo_response_serializes_is_overdue():
    todo = TodoResponse(
        id="00000000-0000-4000-8000-000000000000", created_at="2026-01-01T00:00:00Z",
        task="Old", due_date=date(2000, 1, 1), completed=False,
    )
    assert todo.model_dump()["is_overdue"] is True


# --- Checkout -----------------------------------------------------------------

def test_subscription_checkout_strips_price_id():
    request = CheckoutRequest(type="subscription", price_id="  price_basic_monthly ")
    assert request.type == CheckoutType.SUBSCRIPTION
    assert request.price_id == "price_basic_monthly"


@pytest.mark.parametrize("payload, message", [
    ({"type": "subscription", "price_id": "  "}, "Invalid price ID"),
    ({"type": "credits"}, "Invalid credits amount"),
    ({"type": "credits", "credits": -10}, "Invalid credits amount"),
])
def test_checkout_payload_mismatch(payload, message):
    with pytest.raises(ValidationError, match=message):
        CheckoutRequest(**payload)


def test_checkout_type_closed_set():
    with pytest.raises(ValidationError):
        CheckoutRequest(type="donation", credits=5)
