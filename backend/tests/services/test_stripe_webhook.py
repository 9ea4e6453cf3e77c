"""Stripe Webhook — verifies signature checks, event handlers and redelivery dedupe.

Invariants:
    - Missing or forged Stripe-Signature → 400, nothing recorded
    - checkout.session.completed (credits) → payment row + credits added
    - checkout.session.completed (subscription) → subscription re-read from Stripe and applied
    - subscription updated/deleted → row found by customer / subscription id
    - A redelivered event id is acknowledged without re-applying its effect
    - Signed body that is not JSON → 400 "Invalid payload"
    - A failing handler → 500 with the effect and the event id both rolled back
"""

from sqlalchemy import func, select

from app.models import CreditTransaction, PaymentRecord, StripeEvent, UserCredits, UserSubscription
from app.services.billing import get_or_create_subscription
from tests.services.fakes import USER_ID, sign_payload, stripe_event

WEBHOOK = "/api/v1/stripe/webhook"


async def _post(client, payload: bytes, signature: str | None = None):
    headers = {"Content-Type": "application/json"}
    headers["Stripe-Signature"] = signature if signature is not None else sign_payload(payload)
    return await client.post(WEBHOOK, content=payload, headers=headers)


def _credits_session(credits: int = 500) -> dict:
    return {
        "id": "cs_1",
        "customer": "cus_1",
        "payment_intent": "pi_1",
        "amount_total": credits,
        "currency": "usd",
        "metadata": {"userId": str(USER_ID), "type": "credits", "credits": str(credits)},
    }


def _stripe_subscription(status: str = "active", **overrides) -> dict:
    sub = {
        "id": "sub_1",
        "customer": "cus_1",
        "status": status,
        "current_period_start": 1_767_225_600,
        "current_period_end": 1_769_904_000,
        "cancel_at_period_end": False,
        "items": {"data": [{"price": {"id": "price_premium_monthly", "recurring": {"interval": "month"}}}]},
    }
    sub.update(overrides)
    return sub


async def test_missing_signature_rejected(client):
    res = await client.post(WEBHOOK, content=b"{}")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid signature"


async def test_forged_signature_rejected(client, test_db):
    payload = stripe_event("evt_1", "checkout.session.completed", _credits_session())

    res = await _post(client, payload, sign_payload(payload, secret="whsec_wrong"))

    assert res.status_code == 400
    assert await test_db.scalar(select(func.count()).select_from(StripeEvent)) == 0


async def test_credits_checkout_adds_credits(client, seed_user, test_db):
    payload = stripe_event("evt_1", "checkout.session.completed", _credits_session(500))

    res = await _post(client, payload)

    assert res.status_code == 200
    assert res.json() == {"received": True}
    account = await test_db.get(UserCredits, USER_ID)
    assert account.balance == 600
    payment = (await test_db.execute(select(PaymentRecord))).scalar_one()
    assert (payment.amount, payment.payment_type, payment.status) == (500, "credits", "succeeded")
    assert await test_db.get(StripeEvent, "evt_1") is not None


async def test_redelivered_event_applied_once(client, seed_user, test_db):
    payload = stripe_event("evt_dup", "checkout.session.completed", _credits_session(100))

    assert (await _post(client, payload)).status_code == 200
    assert (await _post(client, payload)).status_code == 200

    account = await test_db.get(UserCredits, USER_ID)
    assert account.balance == 200
    purchases = await test_db.scalar(
        select(func.count()).select_from(CreditTransaction)
        .where(CreditTransaction.transaction_type == "purchase"),
    )
    assert purchases == 1


async def test_subscription_checkout_applies_plan(client, seed_user, stripe_gateway, test_db):
    stripe_gateway.subscriptions["sub_1"] = _stripe_subscription()
    session = {
        "id": "cs_2", "customer": "cus_1", "subscription": "sub_1", "amount_total": 999,
        "metadata": {"userId": str(USER_ID), "type": "subscription"},
    }

    res = await _post(client, stripe_event("evt_2", "checkout.session.completed", session))

    assert res.status_code == 200
    assert stripe_gateway.called("retrieve_subscription") == ["sub_1"]
    row = (await test_db.execute(select(UserSubscription))).scalar_one()
    assert row.plan_type == "premium"
    assert row.plan_name == "Premium Monthly"
    assert row.stripe_subscription_id == "sub_1"
    assert row.current_period_end is not None


async def test_checkout_for_unknown_user_is_recorded_and_skipped(client, test_db):
    session = _credits_session()
    session["metadata"]["userId"] = "not-a-uuid"

    res = await _post(client, stripe_event("evt_3", "checkout.session.completed", session))

    assert res.status_code == 200
    assert await test_db.scalar(select(func.count()).select_from(PaymentRecord)) == 0
    assert await test_db.get(StripeEvent, "evt_3") is not None


async def test_subscription_updated_by_customer(client, seed_user, test_db):
    row = await get_or_create_subscription(test_db, USER_ID)
    row.stripe_customer_id = "cus_1"
    await test_db.commit()

    res = await _post(client, stripe_event(
        "evt_4", "customer.subscription.updated",
        _stripe_subscription(status="past_due", cancel_at_period_end=True),
    ))

    assert res.status_code == 200
    await test_db.refresh(row)
    assert row.subscription_status == "past_due"
    assert row.cancel_at_period_end is True
    assert row.plan_type == "premium"


async def test_subscription_deleted_marks_canceled(client, seed_user, test_db):
    row = await get_or_create_subscription(test_db, USER_ID)
    row.stripe_subscription_id = "sub_1"
    await test_db.commit()

    res = await _post(client, stripe_event(
        "evt_5", "customer.subscription.deleted", {"id": "sub_1", "canceled_at": 1_767_225_600},
    ))

    assert res.status_code == 200
    await test_db.refresh(row)
    assert row.subscription_status == "canceled"
    assert row.canceled_at is not None


async def test_unhandled_event_type_acknowledged(client, test_db):
    res = await _post(client, stripe_event("evt_6", "charge.refunded", {"id": "ch_1"}))

    assert res.status_code == 200
    event = await test_db.get(StripeEvent, "evt_6")
    assert event.event_type == "charge.refunded"


async def test_signed_garbage_body_rejected(client, test_db):
    payload = b"{not json"

    res = await _post(client, payload)

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid payload"
    assert await test_db.scalar(select(func.count()).select_from(StripeEvent)) == 0


async def test_handler_failure_rolls_back_and_returns_500(client, seed_user, stripe_gateway, test_db):
    # sub_gone is unknown to the gateway, so applying the checkout raises
    session = {
        "id": "cs_3", "customer": "cus_1", "subscription": "sub_gone", "amount_total": 999,
        "metadata": {"userId": str(USER_ID), "type": "subscription"},
    }

    res = await _post(client, stripe_event("evt_3", "checkout.session.completed", session))

    assert res.status_code == 500
    error = res.json()["error"]
    assert (error["code"], error["message"]) == ("WEBHOOK_FAILED", "Webhook handler failed")
    assert await test_db.scalar(select(func.count()).select_from(PaymentRecord)) == 0
    assert await test_db.get(StripeEvent, "evt_3") is None
