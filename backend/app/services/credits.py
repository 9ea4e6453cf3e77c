"""Credit Ledger — balances, purchases, metered usage and history.

Invariants:
    - First read creates the account with the starter grant (balance = total_purchased)
      and a matching bonus ledger row
    - Deduction is a single conditional UPDATE (balance >= credits): concurrent requests
      can never drive the balance negative
    - Every balance change appends a CreditTransaction with balance_after
    - Never commits: callers (routes, webhook processor) own the transaction

Design Decisions:
    - Package validation lives in core/plans.py; this module trusts its inputs
"""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import CreditTransactionType
from app.core.errors import ErrorContext, InsufficientCreditsError
from app.models import ApiUsage, CreditTransaction, UserCredits

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20


async def get_or_create_account(db: AsyncSession, user_id: UUID) -> UserCredits:
    account = await db.get(UserCredits, user_id)
    if account is not None:
        return account

    starter = get_settings().starter_credits
    account = UserCredits(
        user_id=user_id, balance=starter, total_purchased=starter, total_used=0,
    )
    db.add(account)
    if starter:
        db.add(CreditTransaction(
            user_id=user_id, amount=starter,
            transaction_type=CreditTransactionType.BONUS.value,
            description="Starter credits", balance_after=starter,
        ))
    await db.flush()
    logger.info(
        f"Opened credit account with {starter} credits",
        extra={"user_id": str(user_id)},
    )
    return account


async def add_credits(
    db: AsyncSession,
    user_id: UUID,
    credits: int,
    description: str,
    transaction_type: CreditTransactionType = CreditTransactionType.PURCHASE,
) -> UserCredits:
    account = await get_or_create_account(db, user_id)
    account.balance += credits
    account.total_purchased += credits
    db.add(CreditTransaction(
        user_id=user_id, amount=credits,
        transaction_type=transaction_type.value,
        description=description, balance_after=account.balance,
    ))
    await db.flush()
    return account


async def use_credits(
    db: AsyncSession,
    user_id: UUID,
    endpoint: str,
    credits: int,
    request_data: dict | None = None,
) -> int:
    """Deduct credits for one metered call; returns the remaining balance."""
    account = await get_or_create_account(db, user_id)

    remaining = await db.scalar(
        update(UserCredits)
        .where(UserCredits.user_id == user_id, UserCredits.balance >= credits)
        .values(
            balance=UserCredits.balance - credits,
            total_used=UserCredits.total_used + credits,
        )
        .returning(UserCredits.balance)
        .execution_options(synchronize_session=False),
    )
    if remaining is None:
        await db.refresh(account)
        raise InsufficientCreditsError(
            account.balance, credits, ErrorContext(user_id=str(user_id)),
        )

    db.add(CreditTransaction(
        user_id=user_id, amount=-credits,
        transaction_type=CreditTransactionType.USAGE.value,
        description=f"API usage: {endpoint}", balance_after=remaining,
    ))
    db.add(ApiUsage(
        user_id=user_id, endpoint=endpoint, credits_used=credits,
        request_data=request_data, response_status=200,
    ))
    await db.flush()
    await db.refresh(account)
    logger.info(
        f"Used {credits} credits on {endpoint}", extra={"user_id": str(user_id)},
    )
    return remaining


async def recent_history(
    db: AsyncSession, user_id: UUID,
) -> tuple[list[CreditTransaction], list[ApiUsage]]:
    transactions = await db.execute(
        select(CreditTransaction)
        .where(CreditTransaction.user_id == user_id)
        .order_by(CreditTransaction.created_at.desc())
        .limit(HISTORY_LIMIT),
    )
    usage = await db.execute(
        select(ApiUsage)
        .where(ApiUsage.user_id == user_id)
        .order_by(ApiUsage.created_at.desc())
        .limit(HISTORY_LIMIT),
    )
    return list(transactions.scalars().all()), list(usage.scalars().all())
