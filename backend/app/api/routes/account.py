"""Account Routes — profile summary, navigation preferences, account deletion."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.infrastructure.database import get_db
from app.models import User
from app.schemas.organizer import NavPreferencesUpdate, ProfileResponse
from app.services import account

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/account", tags=["account"])


async def _profile(db: AsyncSession, user: User) -> ProfileResponse:
    return ProfileResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        nav_preferences=user.nav_preferences or [],
        created_at=user.created_at,
        counts=await account.record_counts(db, user.id),
    )


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    return await _profile(db, user)


@router.put("/nav-preferences", response_model=ProfileResponse)
async def set_nav_preferences(
    body: NavPreferencesUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await account.set_nav_preferences(db, user, body.nav_preferences)
    await db.commit()
    return await _profile(db, user)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    """Delete the account and every row it owns."""
    await account.delete_account(db, user.id)
    await db.commit()
