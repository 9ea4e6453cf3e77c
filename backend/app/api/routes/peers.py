"""Peer Routes — peer CRUD, sync toggle and per-feature sync preferences."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.infrastructure.database import get_db
from app.models import User
from app.schemas.organizer import (
    PeerCreate, PeerResponse, PeerUpdate, SyncPreferencesResponse, SyncPreferencesUpdate,
)
from app.services import peers

router = APIRouter(prefix="/api/v1/peers", tags=["peers"])


def _peer_columns(data: dict) -> dict:
    columns = dict(data)
    for name in ("status", "sync_state"):
        if columns.get(name) is not None:
            columns[name] = columns[name].value
    if columns.get("active_features") is not None:
        columns["active_features"] = list(
            dict.fromkeys(f.value for f in columns["active_features"]),
        )
    return columns


# Literal paths first: /sync-preferences must not match /{peer_id}

@router.get("/sync-preferences", response_model=SyncPreferencesResponse)
async def get_sync_preferences(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    return {"preferences": await peers.get_sync_preferences(db, user.id)}


@router.put("/sync-preferences", response_model=SyncPreferencesResponse)
async def set_sync_preferences(
    body: SyncPreferencesUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    preferences = await peers.set_sync_preferences(db, user.id, body.preferences)
    await db.commit()
    return {"preferences": preferences}


@router.get("", response_model=list[PeerResponse])
async def list_peers(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    return await peers.peer_store(db).list(user.id, limit=500)


@router.post("", response_model=PeerResponse, status_code=status.HTTP_201_CREATED)
async def create_peer(
    body: PeerCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    peer = await peers.peer_store(db).create(user.id, _peer_columns(body.model_dump()))
    await db.commit()
    await db.refresh(peer)
    return peer


@router.patch("/{peer_id}", response_model=PeerResponse)
async def update_peer(
    peer_id: UUID,
    body: PeerUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    changes = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k == "email"
    }
    peer = await peers.peer_store(db).update(user.id, peer_id, _peer_columns(changes))
    await db.commit()
    await db.refresh(peer)
    return peer


@router.delete("/{peer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_peer(
    peer_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await peers.peer_store(db).delete(user.id, peer_id)
    await db.commit()


@router.post("/{peer_id}/toggle-sync", response_model=PeerResponse)
async def toggle_sync(
    peer_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Pause or resume syncing with a peer (blocked peers stay blocked)."""
    peer = await peers.toggle_sync(db, user.id, peer_id)
    await db.commit()
    await db.refresh(peer)
    return peer
