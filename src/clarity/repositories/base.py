"""Persistence helpers shared by the user and transaction repositories.

Each write commits on its own; a caller never observes a half-applied change.
"""
from typing import Any, Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clarity.models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(Generic[ModelT]):
    def __init__(self, db: AsyncSession, model: Type[ModelT]):
        self.db = db
        self.model = model

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        return await self.db.get(self.model, record_id)

    async def first_where(self, *criteria: Any) -> ModelT | None:
        """Return the first row matching all criteria, or None."""
        result = await self.db.execute(select(self.model).where(*criteria).limit(1))
        return result.scalars().first()

    async def create(self, obj: ModelT) -> ModelT:
        """Insert a new row and return it with server-side defaults loaded."""
        self.db.add(obj)
        return await self._commit_and_refresh(obj)

    async def _commit_and_refresh(self, obj: ModelT) -> ModelT:
        try:
            await self.db.commit()
        except IntegrityError:
            # Leave the session usable for the caller's error handling
            await self.db.rollback()
            raise
        await self.db.refresh(obj)
        return obj
