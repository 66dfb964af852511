"""Shared repository plumbing: per-session CRUD and dialect-specific upserts."""
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Conflict

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class BaseRepository:
    """CRUD over one model. Writes commit immediately; each call is its own unit of work."""

    model: Any = None

    def __init__(self, db: AsyncSession):
        self.db = db

    def upsert(self):
        """INSERT construct supporting ON CONFLICT for the bound dialect."""
        dialect = self.db.get_bind().dialect.name
        try:
            insert = _UPSERT_INSERTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Upserts are not supported on {dialect}") from None
        return insert(self.model)

    async def find_by_id(self, obj_id: int):
        return await self.db.get(self.model, obj_id)

    async def find_all(self) -> list:
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def create(self, **data):
        obj = self.model(**data)
        self.db.add(obj)
        await self._commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj_id: int, **data):
        obj = await self.find_by_id(obj_id)
        if obj is None:
            return None
        for key, value in data.items():
            setattr(obj, key, value)
        await self._commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj_id: int) -> bool:
        obj = await self.find_by_id(obj_id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self._commit()
        return True

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise Conflict(f"{self.model.__name__} conflicts with an existing record") from exc
