"""Organizer Schemas — checklists, peers, account profile and search results.

Invariants:
    - Shared checklist responses omit owner identity (public by token)
    - Sync preference writes only accept known SyncFeature keys
"""

import datetime as dt
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.core.domain_types import PeerStatus, SyncFeature, SyncState

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
ItemText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
Email = Annotated[str, StringConstraints(strip_whitespace=True, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")]


# ─── Checklists ──────────────────────────────────────────────────

class ChecklistCategoryCreate(BaseModel):
    category_name: Name


class ChecklistCategoryUpdate(BaseModel):
    category_name: Name


class ChecklistItemCreate(BaseModel):
    text: ItemText
    sort_order: int | None = Field(None, ge=0)


class ChecklistItemUpdate(BaseModel):
    text: ItemText | None = None
    completed: bool | None = None
    sort_order: int | None = Field(None, ge=0)


class ChecklistItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID
    text: str
    completed: bool
    sort_order: int
    created_at: datetime


class ChecklistCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_name: str
    is_shared: bool
    share_token: str | None
    created_at: datetime
    items: list[ChecklistItemResponse] = []


class SharedChecklistResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_name: str
    items: list[ChecklistItemResponse] = []


class ShareLinkResponse(BaseModel):
    category_id: UUID
    is_shared: bool
    share_token: str | None


class SharedItemToggle(BaseModel):
    completed: bool


# ─── Peers ───────────────────────────────────────────────────────

class PeerCreate(BaseModel):
    name: Name
    email: Email | None = None
    status: PeerStatus = PeerStatus.OFFLINE
    active_features: list[SyncFeature] = []


class PeerUpdate(BaseModel):
    name: Name | None = None
    email: Email | None = None
    status: PeerStatus | None = None
    sync_state: SyncState | None = None
    active_features: list[SyncFeature] | None = None


class PeerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str | None
    status: PeerStatus
    sync_state: SyncState
    active_features: list[str]
    last_synced_at: datetime | None
    created_at: datetime


class SyncPreferencesUpdate(BaseModel):
    preferences: dict[SyncFeature, bool]


class SyncPreferencesResponse(BaseModel):
    preferences: dict[str, bool]


# ─── Account ─────────────────────────────────────────────────────

class NavPreferencesUpdate(BaseModel):
    nav_preferences: list[Annotated[str, StringConstraints(min_length=1, max_length=50)]] = Field(
        max_length=50,
    )


class ProfileResponse(BaseModel):
    id: UUID
    email: str | None
    role: str
    nav_preferences: list[str]
    created_at: datetime
    counts: dict[str, int]


# ─── Search ──────────────────────────────────────────────────────

class SearchResult(BaseModel):
    type: str
    id: UUID
    title: str
    date: dt.date | None = None
    time: str | None = None
    category: str | None = None
    day_of_week: str | None = None
    completed: bool | None = None


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResult]
