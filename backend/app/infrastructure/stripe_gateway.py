"""Stripe Gateway — async facade over the Stripe SDK with error mapping.

Invariants:
    - Every call passes api_key and stripe_version explicitly (no module-global mutation)
    - stripe.InvalidRequestError → PaymentProviderError("invalid_request") → 400
    - Any other stripe.StripeError → PaymentProviderError("api_error") → 502
    - Webhook payloads are verified before they are parsed; bad signature → WebhookSignatureError,
      signed but undecodable body → 400 "Invalid payload"
    - Returned Stripe objects are plain dicts (core/stripe_payloads.py consumes dicts)

Design Decisions:
    - SDK calls are blocking: run in a worker thread (asyncio.to_thread) so the
      event loop never waits on Stripe
    - Signature check via WebhookSignature.verify_header, then json.loads: the event
      stays a plain dict instead of an SDK object
"""

import asyncio
import json
import logging

import stripe

from app.core.errors import (
    ErrorContext, PaymentProviderError, RequestRejectedError, WebhookSignatureError,
)

logger = logging.getLogger(__name__)


class StripeGateway:
    """Checkout, portal, customer and subscription calls used by billing."""

    def __init__(self, api_key: str, api_version: str, webhook_secret: str):
        self._api_key = api_key
        self._api_version = api_version
        self._webhook_secret = webhook_secret

    @property
    def _auth(self) -> dict:
        return {"api_key": self._api_key, "stripe_version": self._api_version}

    async def _call(self, operation: str, fn, *args, **kwargs):
        try:
            return await asyncio.to_thread(fn, *args, **kwargs, **self._auth)
        except stripe.InvalidRequestError as e:
            logger.warning(
                f"Stripe rejected {operation}: {e.user_message or e}",
                extra={"provider": "stripe"},
            )
            raise PaymentProviderError(
                e.user_message or "Invalid request to Stripe", "invalid_request",
                ErrorContext(provider="stripe"),
            )
        except stripe.StripeError as e:
            logger.error(
                f"Stripe {operation} failed: {e}", extra={"provider": "stripe"},
            )
            raise PaymentProviderError(
                "Payment provider error", "api_error", ErrorContext(provider="stripe"),
            )

    async def create_customer(self, email: str | None, user_id: str) -> str:
        customer = await self._call(
            "customer.create", stripe.Customer.create,
            email=email or None, metadata={"userId": user_id},
        )
        logger.info(f"Created Stripe customer {customer.id}", extra={"user_id": user_id})
        return customer.id

    async def create_checkout_session(self, params: dict) -> tuple[str, str | None]:
        session = await self._call(
            "checkout.create", stripe.checkout.Session.create, **params,
        )
        return session.id, session.url

    async def create_portal_session(self, customer_id: str, return_url: str) -> str:
        session = await self._call(
            "portal.create", stripe.billing_portal.Session.create,
            customer=customer_id, return_url=return_url,
        )
        return session.url

    async def retrieve_subscription(self, subscription_id: str) -> dict:
        subscription = await self._call(
            "subscription.retrieve", stripe.Subscription.retrieve, subscription_id,
        )
        return subscription.to_dict()

    def construct_event(self, payload: bytes, signature: str | None) -> dict:
        """Verify the Stripe-Signature header and decode the event body."""
        if not signature:
            raise WebhookSignatureError()
        try:
            # verify_header formats the payload into the signed string: it must be text
            body = payload.decode("utf-8") if isinstance(payload, bytes) else payload
            stripe.WebhookSignature.verify_header(
                body, signature, self._webhook_secret,
            )
            return json.loads(body)
        except stripe.SignatureVerificationError as e:
            logger.warning(f"Webhook signature verification failed: {e}")
            raise WebhookSignatureError()
        except ValueError:
            raise RequestRejectedError("Invalid payload")
