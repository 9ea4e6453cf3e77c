"""Stripe Payloads — pure translation between Stripe objects and our rows.

Invariants:
    - All functions take/return plain dicts (JSON-decoded Stripe objects); no SDK types
    - Unix timestamps become timezone-aware UTC datetimes; null stays None
    - Checkout metadata always carries userId and type; credits only for credit purchases

Design Decisions:
    - Period bounds read from the subscription first, then from its first item:
      newer Stripe API versions moved current_period_* onto subscription items
    - Session parameters built here (not in the gateway) so they are unit-testable
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from app.core.domain_types import CheckoutType
from app.core.plans import (
    CREDITS_CURRENCY, billing_cycle_for, credits_price_cents, lookup_plan,
)

SUCCESS_PATH = "/payment/success?session_id={CHECKOUT_SESSION_ID}"
SUBSCRIPTION_CANCEL_PATH = "/billing/plans"
CREDITS_CANCEL_PATH = "/credits/purchase"
PORTAL_RETURN_PATH = "/billing"


def from_unix(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _first_item(subscription: dict) -> dict:
    items = (subscription.get("items") or {}).get("data") or []
    return items[0] if items else {}


def subscription_row_fields(subscription: dict) -> dict:
    """Map a Stripe Subscription object onto user_subscriptions columns."""
    item = _first_item(subscription)
    price = item.get("price") or {}
    price_id = price.get("id")
    plan = lookup_plan(price_id)
    interval = (price.get("recurring") or {}).get("interval")

    period_start = subscription.get("current_period_start", item.get("current_period_start"))
    period_end = subscription.get("current_period_end", item.get("current_period_end"))

    return {
        "stripe_customer_id": subscription.get("customer"),
        "stripe_subscription_id": subscription.get("id"),
        "stripe_price_id": price_id,
        "subscription_status": subscription.get("status"),
        "plan_name": plan.name,
        "plan_type": plan.plan_type.value,
        "billing_cycle": billing_cycle_for(interval).value,
        "current_period_start": from_unix(period_start),
        "current_period_end": from_unix(period_end),
        "cancel_at_period_end": bool(subscription.get("cancel_at_period_end")),
        "canceled_at": from_unix(subscription.get("canceled_at")),
        "trial_start": from_unix(subscription.get("trial_start")),
        "trial_end": from_unix(subscription.get("trial_end")),
    }


@dataclass(frozen=True)
class CheckoutMetadata:
    user_id: str | None
    checkout_type: str | None
    credits: int | None


def parse_checkout_metadata(session: dict) -> CheckoutMetadata:
    """Read the metadata we attached when creating the Checkout session."""
    metadata = session.get("metadata") or {}
    raw_credits = metadata.get("credits")
    credits = int(raw_credits) if raw_credits and str(raw_credits).isdigit() else None
    return CheckoutMetadata(
        user_id=metadata.get("userId"),
        checkout_type=metadata.get("type"),
        credits=credits,
    )


def payment_record_fields(session: dict, checkout_type: str | None) -> dict:
    """Map a completed Checkout session onto payment_history columns."""
    is_subscription = checkout_type == CheckoutType.SUBSCRIPTION.value
    return {
        "stripe_payment_intent_id": session.get("payment_intent"),
        "stripe_customer_id": session.get("customer"),
        "amount": session.get("amount_total") or 0,
        "currency": session.get("currency") or CREDITS_CURRENCY,
        "payment_type": "subscription" if is_subscription else "credits",
        "status": "succeeded",
        "description": session.get("description") or f"Payment for {checkout_type}",
        "payment_metadata": session.get("metadata") or {},
    }


def subscription_checkout_params(
    customer_id: str, price_id: str, user_id: str, base_url: str,
) -> dict:
    return {
        "mode": "subscription",
        "payment_method_types": ["card"],
        "customer": customer_id,
        "line_items": [{"price": price_id, "quantity": 1}],
        "success_url": f"{base_url}{SUCCESS_PATH}",
        "cancel_url": f"{base_url}{SUBSCRIPTION_CANCEL_PATH}",
        "metadata": {
            "userId": user_id,
            "type": CheckoutType.SUBSCRIPTION.value,
        },
    }


def credits_checkout_params(
    customer_id: str, credits: int, user_id: str, base_url: str,
) -> dict:
    return {
        "mode": "payment",
        "payment_method_types": ["card"],
        "customer": customer_id,
        "line_items": [
            {
                "price_data": {
                    "currency": CREDITS_CURRENCY,
                    "product_data": {
                        "name": f"{credits} API Credits",
                        "description": f"Purchase {credits} credits for API usage",
                    },
                    "unit_amount": credits_price_cents(credits),
                },
                "quantity": 1,
            },
        ],
        "success_url": f"{base_url}{SUCCESS_PATH}",
        "cancel_url": f"{base_url}{CREDITS_CANCEL_PATH}",
        "metadata": {
            "userId": user_id,
            "type": CheckoutType.CREDITS.value,
            "credits": str(credits),
        },
    }
