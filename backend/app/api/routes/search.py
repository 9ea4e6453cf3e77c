"""Search Route — cross-resource substring search for the signed-in user."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user
from app.infrastructure.database import get_db
from app.models import User
from app.schemas.organizer import SearchResponse
from app.services.search import search_records

router = APIRouter(prefix="/api/v1/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search(
    q: str = Query("", max_length=200),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Search weekly tasks, todos, appointments, activities and notes."""
    results = await search_records(db, user.id, q)
    return {"query": q.strip(), "results": results}
