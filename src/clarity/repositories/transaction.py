"""Transaction repository.

Every lookup, update and delete is keyed by ``(id, user_id)`` so a row owned
by another user is indistinguishable from a missing one.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clarity.models.transaction import Transaction
from clarity.repositories.base import BaseRepository


@dataclass(frozen=True)
class TransactionTotals:
    """Raw aggregate over one user's transactions."""

    total_income: float
    total_expense: float
    count: int


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with owner-scoped queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_owned(self, transaction_id: UUID, user_id: UUID) -> Transaction | None:
        """Get a transaction by id, only if it belongs to the user."""
        return await self.first_where(
            Transaction.id == transaction_id, Transaction.user_id == user_id
        )

    async def list_for_user(
        self,
        user_id: UUID,
        category: str | None = None,
        date_from: datetime | None = None,
        date_before: datetime | None = None,
    ) -> list[Transaction]:
        """List a user's transactions, newest logical date first.

        Args:
            user_id: Owner
            category: Exact category match
            date_from: Inclusive lower bound on the logical date
            date_before: Exclusive upper bound on the logical date
        """
        query = select(Transaction).where(Transaction.user_id == user_id)

        if category is not None:
            query = query.where(Transaction.category == category)

        if date_from is not None:
            query = query.where(Transaction.date >= date_from)

        if date_before is not None:
            query = query.where(Transaction.date < date_before)

        query = query.order_by(Transaction.date.desc(), Transaction.created_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_owned(
        self, transaction_id: UUID, user_id: UUID, data: dict[str, Any]
    ) -> Transaction | None:
        """Replace fields on an owned transaction and commit."""
        txn = await self.get_owned(transaction_id, user_id)
        if txn is None:
            return None

        for key, value in data.items():
            if hasattr(txn, key):
                setattr(txn, key, value)

        return await self._commit_and_refresh(txn)

    async def delete_owned(self, transaction_id: UUID, user_id: UUID) -> bool:
        """Delete an owned transaction. Returns False if nothing matched."""
        result = await self.db.execute(
            delete(Transaction).where(
                Transaction.id == transaction_id, Transaction.user_id == user_id
            )
        )
        await self.db.commit()
        return result.rowcount > 0

    async def get_totals(self, user_id: UUID) -> TransactionTotals:
        """Sum amounts by type and count rows in a single query."""
        income = func.coalesce(
            func.sum(case((Transaction.type == "income", Transaction.amount), else_=0)), 0
        )
        expense = func.coalesce(
            func.sum(case((Transaction.type == "expense", Transaction.amount), else_=0)), 0
        )
        result = await self.db.execute(
            select(
                income.label("total_income"),
                expense.label("total_expense"),
                func.count(Transaction.id).label("count"),
            ).where(Transaction.user_id == user_id)
        )
        row = result.one()
        return TransactionTotals(
            total_income=float(row.total_income or 0),
            total_expense=float(row.total_expense or 0),
            count=int(row.count or 0),
        )
