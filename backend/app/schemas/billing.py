"""Billing Schemas — checkout, portal, subscription, payment history and credit ledger contracts.

Invariants:
    - Subscription checkouts require a non-blank price_id; credit checkouts a positive credit count
    - Credit usage requests carry a non-blank endpoint and credits > 0
    - Amounts in payment history are integer cents (Stripe convention)
"""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from app.core.domain_types import CheckoutType

StripeId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


# ─── Checkout / Portal ───────────────────────────────────────────

class CheckoutRequest(BaseModel):
    type: CheckoutType
    price_id: str | None = None
    credits: int | None = None

    @model_validator(mode="after")
    def check_type_payload(self):
        if self.type == CheckoutType.SUBSCRIPTION:
            if not self.price_id or not self.price_id.strip():
                raise ValueError("Invalid price ID")
            self.price_id = self.price_id.strip()
        elif not self.credits or self.credits <= 0:
            raise ValueError("Invalid credits amount")
        return self


class CheckoutResponse(BaseModel):
    session_id: str
    url: str | None


class PortalResponse(BaseModel):
    url: str | None = None
    redirect_to: str | None = None


class ManualSubscriptionUpdate(BaseModel):
    user_id: UUID
    stripe_customer_id: StripeId
    stripe_subscription_id: StripeId
    price_id: StripeId


# ─── Subscription / Payments ─────────────────────────────────────

class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    stripe_customer_id: str | None
    stripe_subscription_id: str | None
    stripe_price_id: str | None
    subscription_status: str
    plan_name: str
    plan_type: str
    billing_cycle: str
    current_period_start: datetime | None
    current_period_end: datetime | None
    cancel_at_period_end: bool
    canceled_at: datetime | None
    trial_start: datetime | None
    trial_end: datetime | None
    updated_at: datetime


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    stripe_payment_intent_id: str | None
    amount: int
    currency: str
    payment_type: str
    status: str
    description: str | None
    created_at: datetime


# ─── Credits ─────────────────────────────────────────────────────

class CreditsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    balance: int
    total_purchased: int
    total_used: int


class CreditPurchaseRequest(BaseModel):
    credits: int = Field(gt=0)


class CreditUseRequest(BaseModel):
    endpoint: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    credits: int = Field(gt=0)
    request_data: dict[str, Any] | None = None


class CreditUseResponse(BaseModel):
    success: bool = True
    remaining_credits: int


class CreditTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    amount: int
    transaction_type: str
    description: str | None
    balance_after: int
    created_at: datetime


class ApiUsageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    endpoint: str
    credits_used: int
    response_status: int
    created_at: datetime


class CreditHistoryResponse(BaseModel):
    transactions: list[CreditTransactionResponse]
    usage: list[ApiUsageResponse]
