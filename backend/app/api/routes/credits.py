"""Credit Routes — balance, package purchase, metered usage and history.

Invariants:
    - First balance read opens the account with the starter grant
    - Purchases accept only the fixed packages (400 "Invalid credits package")
    - Insufficient balance → 402 with credits (balance) and required
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user, get_stripe_gateway
from app.config import get_settings
from app.infrastructure.database import get_db
from app.infrastructure.stripe_gateway import StripeGateway
from app.models import User
from app.schemas.billing import (
    ApiUsageResponse, CheckoutResponse, CreditHistoryResponse, CreditPurchaseRequest,
    CreditTransactionResponse, CreditsResponse, CreditUseRequest, CreditUseResponse,
)
from app.services import billing, credits

router = APIRouter(prefix="/api/v1/credits", tags=["credits"])


@router.get("", response_model=CreditsResponse)
async def get_balance(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    account = await credits.get_or_create_account(db, user.id)
    await db.commit()
    return account


@router.post("/purchase", response_model=CheckoutResponse)
async def purchase_credits(
    body: CreditPurchaseRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    """Start a Stripe Checkout session for a credit package."""
    session_id, url = await billing.purchase_credits(
        db, gateway, user, body.credits, get_settings().app_url,
    )
    await db.commit()
    return CheckoutResponse(session_id=session_id, url=url)


@router.post("/use", response_model=CreditUseResponse)
async def use_credits(
    body: CreditUseRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    remaining = await credits.use_credits(
        db, user.id, body.endpoint, body.credits, body.request_data,
    )
    await db.commit()
    return CreditUseResponse(remaining_credits=remaining)


@router.get("/history", response_model=CreditHistoryResponse)
async def credit_history(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    transactions, usage = await credits.recent_history(db, user.id)
    return CreditHistoryResponse(
        transactions=[CreditTransactionResponse.model_validate(t) for t in transactions],
        usage=[ApiUsageResponse.model_validate(u) for u in usage],
    )
