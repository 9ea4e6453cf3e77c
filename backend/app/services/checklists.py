"""Checklist Service — owner CRUD for categories/items and public access by share token.

Invariants:
    - Owner operations filter on user_id (foreign categories → 404)
    - Sharing reuses an existing token; unsharing clears token and flag together
    - Public access requires an is_shared category; an item toggled through a token must
      belong to that token's category
    - New items append after the category's current last sort_order

Design Decisions:
    - Public toggle only touches `completed`: anonymous visitors cannot edit text or order
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ResourceNotFoundError
from app.core.planner_rules import generate_share_token
from app.models import ChecklistCategory, ChecklistItem

logger = logging.getLogger(__name__)


# ─── Owner: categories ───────────────────────────────────────────

async def list_categories(db: AsyncSession, user_id: UUID) -> list[ChecklistCategory]:
    result = await db.execute(
        select(ChecklistCategory)
        .where(ChecklistCategory.user_id == user_id)
        .order_by(ChecklistCategory.created_at),
    )
    return list(result.scalars().all())


async def get_category(
    db: AsyncSession, user_id: UUID, category_id: UUID,
) -> ChecklistCategory:
    result = await db.execute(
        select(ChecklistCategory).where(
            ChecklistCategory.id == category_id,
            ChecklistCategory.user_id == user_id,
        ),
    )
    category = result.scalar_one_or_none()
    if category is None:
        raise ResourceNotFoundError("ChecklistCategory", str(category_id))
    return category


async def create_category(
    db: AsyncSession, user_id: UUID, category_name: str,
) -> ChecklistCategory:
    category = ChecklistCategory(
        user_id=user_id, category_name=category_name, is_shared=False, items=[],
    )
    db.add(category)
    await db.flush()
    return category


async def rename_category(
    db: AsyncSession, user_id: UUID, category_id: UUID, category_name: str,
) -> ChecklistCategory:
    category = await get_category(db, user_id, category_id)
    category.category_name = category_name
    await db.flush()
    return category


async def delete_category(db: AsyncSession, user_id: UUID, category_id: UUID) -> None:
    category = await get_category(db, user_id, category_id)
    await db.delete(category)
    await db.flush()


# ─── Owner: items ────────────────────────────────────────────────

async def get_item(db: AsyncSession, user_id: UUID, item_id: UUID) -> ChecklistItem:
    result = await db.execute(
        select(ChecklistItem).where(
            ChecklistItem.id == item_id, ChecklistItem.user_id == user_id,
        ),
    )
    item = result.scalar_one_or_none()
    if item is None:
        raise ResourceNotFoundError("ChecklistItem", str(item_id))
    return item


async def add_item(
    db: AsyncSession,
    user_id: UUID,
    category_id: UUID,
    text: str,
    sort_order: int | None = None,
) -> ChecklistItem:
    category = await get_category(db, user_id, category_id)
    if sort_order is None:
        last = await db.scalar(
            select(func.max(ChecklistItem.sort_order)).where(
                ChecklistItem.category_id == category.id,
            ),
        )
        sort_order = 0 if last is None else last + 1
    item = ChecklistItem(
        user_id=user_id, category_id=category.id, text=text,
        completed=False, sort_order=sort_order,
    )
    db.add(item)
    await db.flush()
    return item


async def update_item(
    db: AsyncSession, user_id: UUID, item_id: UUID, changes: dict,
) -> ChecklistItem:
    item = await get_item(db, user_id, item_id)
    for name, value in changes.items():
        setattr(item, name, value)
    await db.flush()
    return item


async def delete_item(db: AsyncSession, user_id: UUID, item_id: UUID) -> None:
    item = await get_item(db, user_id, item_id)
    await db.delete(item)
    await db.flush()


# ─── Sharing ─────────────────────────────────────────────────────

async def share_category(
    db: AsyncSession, user_id: UUID, category_id: UUID,
) -> ChecklistCategory:
    category = await get_category(db, user_id, category_id)
    if not category.share_token:
        category.share_token = generate_share_token()
        logger.info(
            f"Checklist {category.id} shared", extra={"user_id": str(user_id)},
        )
    category.is_shared = True
    await db.flush()
    return category


async def unshare_category(
    db: AsyncSession, user_id: UUID, category_id: UUID,
) -> ChecklistCategory:
    category = await get_category(db, user_id, category_id)
    category.share_token = None
    category.is_shared = False
    await db.flush()
    return category


async def get_shared_category(db: AsyncSession, share_token: str) -> ChecklistCategory:
    result = await db.execute(
        select(ChecklistCategory).where(
            ChecklistCategory.share_token == share_token,
            ChecklistCategory.is_shared.is_(True),
        ),
    )
    category = result.scalar_one_or_none()
    if category is None:
        raise ResourceNotFoundError("SharedChecklist", share_token)
    return category


async def toggle_shared_item(
    db: AsyncSession, share_token: str, item_id: UUID, completed: bool,
) -> ChecklistItem:
    category = await get_shared_category(db, share_token)
    result = await db.execute(
        select(ChecklistItem).where(
            ChecklistItem.id == item_id, ChecklistItem.category_id == category.id,
        ),
    )
    item = result.scalar_one_or_none()
    if item is None:
        raise ResourceNotFoundError("ChecklistItem", str(item_id))
    item.completed = completed
    await db.flush()
    return item
