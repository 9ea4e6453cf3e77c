"""Billing Routes — Stripe checkout/portal sessions, webhook, subscription and payments.

Invariants:
    - The webhook is unauthenticated; the Stripe-Signature header is its only credential
    - Webhook effect and StripeEvent row commit together; any failure rolls both back
      and answers 500 so Stripe redelivers
    - Manual subscription update is admin-only

Design Decisions:
    - Webhook reads the raw body (Request.body()): signature covers the exact bytes
"""

import logging

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user, get_stripe_gateway, require_admin
from app.config import get_settings
from app.core.errors import WebhookProcessingError
from app.infrastructure.database import get_db
from app.infrastructure.stripe_gateway import StripeGateway
from app.models import User
from app.schemas.billing import (
    CheckoutRequest, CheckoutResponse, ManualSubscriptionUpdate, PaymentResponse,
    PortalResponse, SubscriptionResponse,
)
from app.services import billing
from app.services.stripe_webhook import StripeWebhookProcessor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/stripe", tags=["billing"])
account_router = APIRouter(prefix="/api/v1/billing", tags=["billing"])


@router.post("/checkout-session", response_model=CheckoutResponse)
async def create_checkout_session(
    body: CheckoutRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    session_id, url = await billing.create_checkout(
        db, gateway, user, body.type, get_settings().app_url,
        price_id=body.price_id, credits=body.credits,
    )
    await db.commit()
    return CheckoutResponse(session_id=session_id, url=url)


@router.post(
    "/portal-session", response_model=PortalResponse, response_model_exclude_none=True,
)
async def create_portal_session(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    return await billing.create_portal(db, gateway, user.id, get_settings().app_url)


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    payload = await request.body()
    event = gateway.construct_event(payload, stripe_signature)
    event_type = event.get("type", "")
    try:
        await StripeWebhookProcessor(db, gateway).process(event)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(
            f"Webhook handler failed: {e}",
            extra={"event_id": event.get("id"), "event_type": event_type},
            exc_info=True,
        )
        raise WebhookProcessingError(event_type)
    return {"received": True}


@router.post("/manual-subscription")
async def manual_update_subscription(
    body: ManualSubscriptionUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Admin repair: put a user on the manual plan with the given Stripe ids."""
    await billing.apply_manual_subscription(
        db, body.user_id, body.stripe_customer_id,
        body.stripe_subscription_id, body.price_id,
    )
    await db.commit()
    logger.info(
        f"Manual subscription applied for {body.user_id}",
        extra={"user_id": str(admin.id)},
    )
    return {"success": True}


@account_router.get("/subscription", response_model=SubscriptionResponse)
async def get_subscription(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    """Current plan; the free plan row is created on first read."""
    subscription = await billing.get_or_create_subscription(db, user.id)
    await db.commit()
    await db.refresh(subscription)
    return subscription


@account_router.get("/payments", response_model=list[PaymentResponse])
async def list_payments(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    return await billing.list_payments(db, user.id)
