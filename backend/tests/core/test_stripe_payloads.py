"""Stripe Payloads — verifies translation of Stripe objects into row fields.

Tests:
    - Subscription objects map onto user_subscriptions columns
    - Period bounds fall back to the first subscription item
    - Checkout metadata parsing tolerates missing/garbage credits
    - Checkout session params carry userId/type metadata
"""

from datetime import datetime, timezone

from app.core.stripe_payloads import (
    credits_checkout_params, from_unix, parse_checkout_metadata,
    payment_record_fields, subscription_checkout_params, subscription_row_fields,
)


def _subscription(**overrides) -> dict:
    sub = {
        "id": "sub_123",
        "customer": "cus_123",
        "status": "active",
        "current_period_start": 1_700_000_000,
        "current_period_end": 1_702_592_000,
        "cancel_at_period_end": False,
        "canceled_at": None,
        "trial_start": None,
        "trial_end": None,
        "items": {
            "data": [
                {"price": {"id": "price_premium_yearly", "recurring": {"interval": "year"}}},
            ],
        },
    }
    sub.update(overrides)
    return sub


def test_from_unix_is_utc_aware():
    assert from_unix(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert from_unix(None) is None


def test_subscription_row_fields_maps_plan():
    fields = subscription_row_fields(_subscription())
    assert fields["stripe_subscription_id"] == "sub_123"
    assert fields["stripe_customer_id"] == "cus_123"
    assert fields["stripe_price_id"] == "price_premium_yearly"
    assert fields["plan_name"] == "Premium Yearly"
    assert fields["plan_type"] == "premium"
    assert fields["billing_cycle"] == "yearly"
    assert fields["subscription_status"] == "active"
    assert fields["current_period_start"] == from_unix(1_700_000_000)
    assert fields["canceled_at"] is None


def test_subscription_period_falls_back_to_item():
    sub = _subscription()
    del sub["current_period_start"]
    del sub["current_period_end"]
    sub["items"]["data"][0]["current_period_start"] = 10
    sub["items"]["data"][0]["current_period_end"] = 20

    fields = subscription_row_fields(sub)

    assert fields["current_period_start"] == from_unix(10)
    assert fields["current_period_end"] == from_unix(20)


def test_subscription_without_items_is_unknown_plan():
    fields = subscription_row_fields(_subscription(items={"data": []}))
    assert fields["plan_name"] == "Unknown Plan"
    assert fields["plan_type"] == "free"
    assert fields["billing_cycle"] == "monthly"


def test_parse_checkout_metadata_credits():
    meta = parse_checkout_metadata(
        {"metadata": {"userId": "u1", "type": "credits", "credits": "500"}},
    )
    assert meta.user_id == "u1"
    assert meta.checkout_type == "credits"
    assert meta.credits == 500


def test_parse_checkout_metadata_garbage_credits():
    meta = parse_checkout_metadata({"metadata": {"credits": "lots"}})
    assert meta.credits is None
    assert meta.user_id is None


def test_parse_checkout_metadata_missing_metadata():
    meta = parse_checkout_metadata({})
    assert meta.checkout_type is None


def test_payment_record_fields_defaults():
    fields = payment_record_fields({"metadata": {"type": "credits"}}, "credits")
    assert fields["amount"] == 0
    assert fields["currency"] == "usd"
    assert fields["payment_type"] == "credits"
    assert fields["status"] == "succeeded"
    assert fields["description"] == "Payment for credits"


def test_subscription_checkout_params():
    params = subscription_checkout_params("cus_1", "price_basic_monthly", "u1", "https://app")
    assert params["mode"] == "subscription"
    assert params["customer"] == "cus_1"
    assert params["line_items"] == [{"price": "price_basic_monthly", "quantity": 1}]
    assert params["metadata"] == {"userId": "u1", "type": "subscription"}
    assert params["success_url"].startswith("https://app/payment/success")
    assert params["cancel_url"] == "https://app/billing/plans"


def test_credits_checkout_params():
    params = credits_checkout_params("cus_1", 1000, "u1", "https://app")
    line = params["line_items"][0]
    assert params["mode"] == "payment"
    assert line["price_data"]["unit_amount"] == 1000
    assert line["price_data"]["product_data"]["name"] == "1000 API Credits"
    assert params["metadata"]["credits"] == "1000"
    assert params["cancel_url"] == "https://app/credits/purchase"
