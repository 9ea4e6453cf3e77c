"""Stripe Webhook Processor — applies verified Stripe events to local billing rows.

Invariants:
    - An event id already in stripe_events is acknowledged without re-applying its effect
    - The StripeEvent row is added in the same transaction as the effect (route commits)
    - Subscription rows are last-write-wins copies of the Stripe Subscription
    - Unknown customers and missing metadata are logged and skipped (event still recorded)
    - Failures propagate: the route answers 500 and Stripe redelivers

Design Decisions:
    - Dispatch table keyed by event type string; unhandled types are logged only
    - Subscription checkouts re-read the Subscription from Stripe: the session carries
      only its id
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import CheckoutType
from app.core.stripe_payloads import (
    from_unix, parse_checkout_metadata, payment_record_fields, subscription_row_fields,
)
from app.infrastructure.stripe_gateway import StripeGateway
from app.models import PaymentRecord, StripeEvent, User, UserSubscription
from app.services import credits as credit_ledger
from app.services.billing import get_or_create_subscription

logger = logging.getLogger(__name__)


class StripeWebhookProcessor:
    """Routes one verified event to its handler."""

    def __init__(self, db: AsyncSession, gateway: StripeGateway):
        self.db = db
        self.gateway = gateway
        self._handlers = {
            "checkout.session.completed": self._checkout_completed,
            "customer.subscription.created": self._subscription_changed,
            "customer.subscription.updated": self._subscription_changed,
            "customer.subscription.deleted": self._subscription_deleted,
            "invoice.payment_succeeded": self._invoice_logged,
            "invoice.payment_failed": self._invoice_logged,
        }

    async def process(self, event: dict) -> bool:
        """Apply the event; False when it was already processed."""
        event_id = event.get("id")
        event_type = event.get("type", "")
        log_extra = {"event_id": event_id, "event_type": event_type}

        if event_id and await self.db.get(StripeEvent, event_id) is not None:
            logger.info("Duplicate Stripe event ignored", extra=log_extra)
            return False

        obj = (event.get("data") or {}).get("object") or {}
        handler = self._handlers.get(event_type)
        if handler is None:
            logger.info("Unhandled Stripe event type", extra=log_extra)
        else:
            await handler(obj)

        if event_id:
            self.db.add(StripeEvent(
                event_id=event_id, event_type=event_type,
                stripe_created=event.get("created"),
            ))
        await self.db.flush()
        return True

    # ─── Handlers ────────────────────────────────────────────────

    async def _checkout_completed(self, session: dict) -> None:
        metadata = parse_checkout_metadata(session)
        user_id = _parse_uuid(metadata.user_id)
        if user_id is None or await self.db.get(User, user_id) is None:
            logger.error(
                f"Checkout session {session.get('id')} has no known userId",
            )
            return

        self.db.add(PaymentRecord(
            user_id=user_id, **payment_record_fields(session, metadata.checkout_type),
        ))

        if metadata.checkout_type == CheckoutType.SUBSCRIPTION.value and session.get("subscription"):
            subscription = await self.gateway.retrieve_subscription(session["subscription"])
            row = await get_or_create_subscription(self.db, user_id)
            _apply_subscription(row, subscription)
            logger.info(
                f"Subscription {subscription.get('id')} activated",
                extra={"user_id": str(user_id)},
            )
        elif metadata.checkout_type == CheckoutType.CREDITS.value and metadata.credits:
            await credit_ledger.add_credits(
                self.db, user_id, metadata.credits,
                f"Purchased {metadata.credits} credits",
            )
            logger.info(
                f"Added {metadata.credits} purchased credits",
                extra={"user_id": str(user_id)},
            )

    async def _subscription_changed(self, subscription: dict) -> None:
        customer_id = subscription.get("customer")
        row = await self._find_row(UserSubscription.stripe_customer_id, customer_id)
        if row is None:
            logger.warning(f"No subscription row for Stripe customer {customer_id}")
            return
        _apply_subscription(row, subscription)

    async def _subscription_deleted(self, subscription: dict) -> None:
        row = await self._find_row(
            UserSubscription.stripe_subscription_id, subscription.get("id"),
        )
        if row is None:
            logger.warning(f"No subscription row for {subscription.get('id')}")
            return
        row.subscription_status = "canceled"
        row.canceled_at = (
            from_unix(subscription.get("canceled_at")) or datetime.now(timezone.utc)
        )

    async def _invoice_logged(self, invoice: dict) -> None:
        logger.info(
            f"Invoice {invoice.get('id')} status={invoice.get('status')} "
            f"customer={invoice.get('customer')}",
        )

    async def _find_row(self, column, value) -> UserSubscription | None:
        if not value:
            return None
        result = await self.db.execute(select(UserSubscription).where(column == value))
        return result.scalars().first()


def _apply_subscription(row: UserSubscription, subscription: dict) -> None:
    for name, value in subscription_row_fields(subscription).items():
        setattr(row, name, value)


def _parse_uuid(value: str | None) -> UUID | None:
    try:
        return UUID(value) if value else None
    except ValueError:
        return None
