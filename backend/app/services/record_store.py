"""Record Store — user-scoped CRUD shared by every planner resource.

Invariants:
    - Every query filters on user_id; another user's record is indistinguishable from
      a missing one (ResourceNotFoundError → 404)
    - update() applies only the fields it is given, then runs the resource's check
    - Never commits: the route owns the transaction boundary

Design Decisions:
    - One generic store over fifteen near-identical repositories: resources differ only
      in model, date column and ordering (declared in api/routes/records.py)
"""

import logging
from collections.abc import Callable
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ResourceNotFoundError
from app.db.base import Base

logger = logging.getLogger(__name__)


class RecordStore:
    """CRUD over one owned model for one request's session."""

    def __init__(
        self,
        db: AsyncSession,
        model: type[Base],
        resource_name: str,
        date_field: str | None = None,
        order_by: tuple = (),
    ):
        self.db = db
        self.model = model
        self.resource_name = resource_name
        self.date_field = date_field
        self.order_by = order_by or (model.created_at.desc(),)

    async def list(
        self,
        user_id: UUID,
        *,
        limit: int = 100,
        offset: int = 0,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list:
        query = select(self.model).where(self.model.user_id == user_id)
        if self.date_field:
            column = getattr(self.model, self.date_field)
            if date_from:
                query = query.where(column >= date_from)
            if date_to:
                query = query.where(column <= date_to)
        query = query.order_by(*self.order_by).limit(limit).offset(offset)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, user_id: UUID, record_id: UUID):
        result = await self.db.execute(
            select(self.model).where(
                self.model.id == record_id, self.model.user_id == user_id,
            ),
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise ResourceNotFoundError(self.resource_name, str(record_id))
        return record

    async def create(self, user_id: UUID, data: dict):
        record = self.model(user_id=user_id, **data)
        self.db.add(record)
        await self.db.flush()
        logger.info(
            f"Created {self.resource_name} {record.id}",
            extra={"user_id": str(user_id), "resource": self.resource_name},
        )
        return record

    async def update(
        self,
        user_id: UUID,
        record_id: UUID,
        data: dict,
        check: Callable[[object], None] | None = None,
    ):
        record = await self.get(user_id, record_id)
        for name, value in data.items():
            setattr(record, name, value)
        if check:
            check(record)
        await self.db.flush()
        return record

    async def delete(self, user_id: UUID, record_id: UUID) -> None:
        record = await self.get(user_id, record_id)
        await self.db.delete(record)
        await self.db.flush()
        logger.info(
            f"Deleted {self.resource_name} {record_id}",
            extra={"user_id": str(user_id), "resource": self.resource_name},
        )
