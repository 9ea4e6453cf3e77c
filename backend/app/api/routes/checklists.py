"""Checklist Routes — owner CRUD, share links and public token access.

Invariants:
    - /api/v1/checklists/* requires authentication
    - /api/v1/shared-checklists/{token} is public; it exposes only shared categories
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.infrastructure.database import get_db
from app.models import User
from app.schemas.organizer import (
    ChecklistCategoryCreate, ChecklistCategoryResponse, ChecklistCategoryUpdate,
    ChecklistItemCreate, ChecklistItemResponse, ChecklistItemUpdate,
    ShareLinkResponse, SharedChecklistResponse, SharedItemToggle,
)
from app.services import checklists

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/checklists", tags=["checklists"])
shared_router = APIRouter(prefix="/api/v1/shared-checklists", tags=["checklists"])


# ─── Categories ──────────────────────────────────────────────────

@router.get("", response_model=list[ChecklistCategoryResponse])
async def list_categories(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    """Categories with their items (sort_order, then created_at)."""
    return await checklists.list_categories(db, user.id)


@router.post(
    "", response_model=ChecklistCategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: ChecklistCategoryCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category = await checklists.create_category(db, user.id, body.category_name)
    await db.commit()
    return category


@router.patch("/{category_id}", response_model=ChecklistCategoryResponse)
async def rename_category(
    category_id: UUID,
    body: ChecklistCategoryUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category = await checklists.rename_category(db, user.id, category_id, body.category_name)
    await db.commit()
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await checklists.delete_category(db, user.id, category_id)
    await db.commit()


# ─── Items ───────────────────────────────────────────────────────

@router.post(
    "/{category_id}/items",
    response_model=ChecklistItemResponse, status_code=status.HTTP_201_CREATED,
)
async def add_item(
    category_id: UUID,
    body: ChecklistItemCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item = await checklists.add_item(db, user.id, category_id, body.text, body.sort_order)
    await db.commit()
    return item


@router.patch("/items/{item_id}", response_model=ChecklistItemResponse)
async def update_item(
    item_id: UUID,
    body: ChecklistItemUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    item = await checklists.update_item(db, user.id, item_id, changes)
    await db.commit()
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await checklists.delete_item(db, user.id, item_id)
    await db.commit()


# ─── Sharing ─────────────────────────────────────────────────────

@router.post("/{category_id}/share", response_model=ShareLinkResponse)
async def share_category(
    category_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category = await checklists.share_category(db, user.id, category_id)
    await db.commit()
    return ShareLinkResponse(
        category_id=category.id, is_shared=category.is_shared,
        share_token=category.share_token,
    )


@router.delete("/{category_id}/share", response_model=ShareLinkResponse)
async def unshare_category(
    category_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    category = await checklists.unshare_category(db, user.id, category_id)
    await db.commit()
    return ShareLinkResponse(
        category_id=category.id, is_shared=category.is_shared, share_token=None,
    )


@shared_router.get("/{share_token}", response_model=SharedChecklistResponse)
async def read_shared_checklist(share_token: str, db: AsyncSession = Depends(get_db)):
    """Public read of a shared checklist."""
    return await checklists.get_shared_category(db, share_token)


@shared_router.patch(
    "/{share_token}/items/{item_id}", response_model=ChecklistItemResponse,
)
async def toggle_shared_item(
    share_token: str,
    item_id: UUID,
    body: SharedItemToggle,
    db: AsyncSession = Depends(get_db),
):
    """Public completion toggle for an item of a shared checklist."""
    item = await checklists.toggle_shared_item(db, share_token, item_id, body.completed)
    await db.commit()
    return item
