"""Billing Service — subscription rows, Stripe customers, checkout, portal and payment history.

Invariants:
    - One UserSubscription per user; first read creates the free plan row
    - A Stripe customer is created at most once per user and stored on the subscription row
    - Portal: no row → 404; free plan (or basic without customer) → redirect to plans;
      no customer → 404; otherwise a portal URL returning to /billing
    - Never commits, except ensure_customer: a new Stripe customer id is committed
      before any further Stripe call so a failed checkout cannot orphan it
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import BillingCycle, CheckoutType, PlanType
from app.core.errors import RequestRejectedError, ResourceNotFoundError
from app.core.plans import (
    FREE_PLAN_NAME, FREE_PLAN_PRICE_ID, MANUAL_PERIOD_DAYS, MANUAL_PLAN,
    is_valid_credit_package,
)
from app.core.stripe_payloads import (
    PORTAL_RETURN_PATH, SUBSCRIPTION_CANCEL_PATH, credits_checkout_params,
    subscription_checkout_params,
)
from app.infrastructure.stripe_gateway import StripeGateway
from app.models import PaymentRecord, User, UserSubscription

logger = logging.getLogger(__name__)

PAYMENT_HISTORY_LIMIT = 50


async def find_subscription(db: AsyncSession, user_id: UUID) -> UserSubscription | None:
    result = await db.execute(
        select(UserSubscription).where(UserSubscription.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def get_or_create_subscription(db: AsyncSession, user_id: UUID) -> UserSubscription:
    subscription = await find_subscription(db, user_id)
    if subscription is not None:
        return subscription
    subscription = UserSubscription(
        user_id=user_id,
        stripe_price_id=FREE_PLAN_PRICE_ID,
        subscription_status="active",
        plan_name=FREE_PLAN_NAME,
        plan_type=PlanType.FREE.value,
        billing_cycle=BillingCycle.MONTHLY.value,
        cancel_at_period_end=False,
    )
    db.add(subscription)
    await db.flush()
    return subscription


async def ensure_customer(
    db: AsyncSession, gateway: StripeGateway, user: User,
) -> str:
    subscription = await get_or_create_subscription(db, user.id)
    if subscription.stripe_customer_id:
        return subscription.stripe_customer_id
    customer_id = await gateway.create_customer(user.email, str(user.id))
    subscription.stripe_customer_id = customer_id
    await db.commit()
    logger.info("Stripe customer created", extra={"user_id": str(user.id)})
    return customer_id


async def create_checkout(
    db: AsyncSession,
    gateway: StripeGateway,
    user: User,
    checkout_type: CheckoutType,
    base_url: str,
    price_id: str | None = None,
    credits: int | None = None,
) -> tuple[str, str | None]:
    customer_id = await ensure_customer(db, gateway, user)
    if checkout_type == CheckoutType.SUBSCRIPTION:
        params = subscription_checkout_params(customer_id, price_id, str(user.id), base_url)
    else:
        params = credits_checkout_params(customer_id, credits, str(user.id), base_url)
    session_id, url = await gateway.create_checkout_session(params)
    logger.info(
        f"Checkout session {session_id} created ({checkout_type.value})",
        extra={"user_id": str(user.id)},
    )
    return session_id, url


async def purchase_credits(
    db: AsyncSession, gateway: StripeGateway, user: User, credits: int, base_url: str,
) -> tuple[str, str | None]:
    if not is_valid_credit_package(credits):
        raise RequestRejectedError("Invalid credits package")
    return await create_checkout(
        db, gateway, user, CheckoutType.CREDITS, base_url, credits=credits,
    )


async def create_portal(
    db: AsyncSession, gateway: StripeGateway, user_id: UUID, base_url: str,
) -> dict:
    subscription = await find_subscription(db, user_id)
    if subscription is None:
        raise ResourceNotFoundError("Subscription", str(user_id))

    plan_type = subscription.plan_type
    if plan_type == PlanType.FREE.value or (
        plan_type == PlanType.BASIC.value and not subscription.stripe_customer_id
    ):
        return {"redirect_to": SUBSCRIPTION_CANCEL_PATH}
    if not subscription.stripe_customer_id:
        raise ResourceNotFoundError("StripeCustomer", str(user_id))

    url = await gateway.create_portal_session(
        subscription.stripe_customer_id, f"{base_url}{PORTAL_RETURN_PATH}",
    )
    return {"url": url}


async def list_payments(db: AsyncSession, user_id: UUID) -> list[PaymentRecord]:
    result = await db.execute(
        select(PaymentRecord)
        .where(PaymentRecord.user_id == user_id)
        .order_by(PaymentRecord.created_at.desc())
        .limit(PAYMENT_HISTORY_LIMIT),
    )
    return list(result.scalars().all())


async def apply_manual_subscription(
    db: AsyncSession,
    user_id: UUID,
    stripe_customer_id: str,
    stripe_subscription_id: str,
    price_id: str,
) -> UserSubscription:
    """Force a user onto the manual plan (repair path for missed webhooks)."""
    if await db.get(User, user_id) is None:
        raise ResourceNotFoundError("User", str(user_id))
    subscription = await get_or_create_subscription(db, user_id)
    now = datetime.now(timezone.utc)
    subscription.stripe_customer_id = stripe_customer_id
    subscription.stripe_subscription_id = stripe_subscription_id
    subscription.stripe_price_id = price_id
    subscription.subscription_status = "active"
    subscription.plan_name = MANUAL_PLAN.name
    subscription.plan_type = MANUAL_PLAN.plan_type.value
    subscription.billing_cycle = BillingCycle.MONTHLY.value
    subscription.current_period_start = now
    subscription.current_period_end = now + timedelta(days=MANUAL_PERIOD_DAYS)
    await db.flush()
    logger.warning(
        "Subscription updated manually", extra={"user_id": str(user_id)},
    )
    return subscription
