"""Credential store.

Emails are matched exactly as stored; signup and login share that rule.
"""
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from clarity.models.user import User
from clarity.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        return await self.first_where(User.email == email)

    async def email_exists(self, email: str) -> bool:
        """True if an account is already registered under ``email``."""
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())
