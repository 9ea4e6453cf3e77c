"""Plan Catalog — pure lookups for Stripe prices, credit packages and pricing.

Invariants:
    - Unknown price ids resolve to ("Unknown Plan", PlanType.FREE)
    - Credit packages are a closed set; anything else is rejected by the caller
    - One credit costs one US cent

Design Decisions:
    - Catalog kept in code (not DB): prices change with deployments, not at runtime
"""

from dataclasses import dataclass

from app.core.domain_types import BillingCycle, PlanType


@dataclass(frozen=True)
class PlanInfo:
    name: str
    plan_type: PlanType


PLAN_CATALOG: dict[str, PlanInfo] = {
    "price_1SLZFH6jTRzt8LDZNEOT6oFB": PlanInfo("Basic Monthly ($3.25)", PlanType.BASIC),
    "price_basic_monthly": PlanInfo("Basic Monthly", PlanType.BASIC),
    "price_basic_yearly": PlanInfo("Basic Yearly", PlanType.BASIC),
    "price_premium_monthly": PlanInfo("Premium Monthly", PlanType.PREMIUM),
    "price_premium_yearly": PlanInfo("Premium Yearly", PlanType.PREMIUM),
    "price_enterprise_monthly": PlanInfo("Enterprise Monthly", PlanType.ENTERPRISE),
    "price_enterprise_yearly": PlanInfo("Enterprise Yearly", PlanType.ENTERPRISE),
}

UNKNOWN_PLAN = PlanInfo("Unknown Plan", PlanType.FREE)

FREE_PLAN_PRICE_ID = "free_plan"
FREE_PLAN_NAME = "Free Plan"

# Plan applied by the admin-only manual subscription repair
MANUAL_PLAN = PlanInfo("Basic Monthly ($3.25)", PlanType.BASIC)
MANUAL_PERIOD_DAYS = 30

CREDIT_PACKAGES: tuple[int, ...] = (100, 500, 1000, 2500, 5000)
CENTS_PER_CREDIT = 1
CREDITS_CURRENCY = "usd"


def lookup_plan(price_id: str | None) -> PlanInfo:
    """Resolve a Stripe price id to its display name and plan type."""
    if not price_id:
        return UNKNOWN_PLAN
    return PLAN_CATALOG.get(price_id, UNKNOWN_PLAN)


def billing_cycle_for(interval: str | None) -> BillingCycle:
    """Stripe recurring interval → billing cycle ('year' is the only yearly one)."""
    return BillingCycle.YEARLY if interval == "year" else BillingCycle.MONTHLY


def is_valid_credit_package(credits: int) -> bool:
    return credits in CREDIT_PACKAGES


def credits_price_cents(credits: int) -> int:
    """Total price of a credit purchase in cents."""
    return credits * CENTS_PER_CREDIT
