"""Transaction service.

Validation, ownership enforcement and summary aggregation around the
transaction repository. Every operation takes the acting user's id; records
owned by anyone else behave exactly like records that do not exist.
"""

import logging
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any
from uuid import UUID

from clarity.categorization.taxonomy import TransactionKind, is_known_category
from clarity.core.exceptions import NotFoundError, ValidationError
from clarity.models.transaction import MAX_AMOUNT, Transaction
from clarity.repositories.transaction import TransactionRepository
from clarity.schemas.transaction import TransactionSummary

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class TransactionService:
    """Service for owner-scoped transaction operations."""

    def __init__(self, repo: TransactionRepository):
        """Initialize the service.

        Args:
            repo: Transaction repository bound to the request's session
        """
        self.repo = repo

    @staticmethod
    def _validate(
        kind: TransactionKind | str | None,
        amount: float | None,
        category: str | None,
    ) -> tuple[TransactionKind, float, str]:
        """Check required fields and normalise them.

        Raises:
            ValidationError: If a field is missing or invalid
        """
        missing = [
            name
            for name, value in (("type", kind), ("amount", amount), ("category", category))
            if value is None
        ]
        if missing:
            raise ValidationError(
                message=f"Missing required fields: {', '.join(missing)}",
                details={"missing": missing},
            )

        try:
            kind = TransactionKind(kind)
        except ValueError:
            raise ValidationError(
                error_code="VAL_002",
                message=f"Invalid transaction type: {kind!r}",
                details={"type": kind},
            )

        if isinstance(amount, bool):
            raise ValidationError(message="Amount must be a number")
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValidationError(message="Amount must be a number")
        if not math.isfinite(amount):
            raise ValidationError(message="Amount must be a finite number")
        if amount < 0:
            raise ValidationError(message="Amount must be positive", details={"amount": amount})
        if amount > MAX_AMOUNT:
            raise ValidationError(
                message=f"Amount must not exceed {MAX_AMOUNT}", details={"amount": amount}
            )

        category = str(category).strip()
        if not category:
            raise ValidationError(message="Category is required")

        if not is_known_category(category, kind):
            # Advisory only: the store accepts any non-empty category.
            logger.debug(f"Category {category!r} is outside the {kind.value} taxonomy")

        return kind, amount, category

    async def list_transactions(
        self,
        user_id: UUID,
        category: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """List the user's transactions, newest logical date first.

        Args:
            user_id: Acting user
            category: Exact category match
            start_date: Inclusive first day
            end_date: Inclusive last day
        """
        date_from = _start_of_day(start_date) if start_date else None
        date_before = _start_of_day(end_date + timedelta(days=1)) if end_date else None

        return await self.repo.list_for_user(
            user_id,
            category=category,
            date_from=date_from,
            date_before=date_before,
        )

    async def create(
        self,
        user_id: UUID,
        kind: TransactionKind | str | None,
        amount: float | None,
        category: str | None,
        description: str | None = None,
        date: datetime | None = None,
    ) -> Transaction:
        """Create a transaction owned by ``user_id``.

        Raises:
            ValidationError: If type, amount or category is missing or invalid
        """
        kind, amount, category = self._validate(kind, amount, category)

        txn = Transaction(
            user_id=user_id,
            type=kind.value,
            amount=amount,
            category=category,
            description=(description or "").strip(),
            date=_as_utc(date) if date else datetime.now(timezone.utc),
        )
        created = await self.repo.create(txn)
        logger.info(
            "Transaction created",
            extra={"user_id": str(user_id), "transaction_id": str(created.id)},
        )
        return created

    async def get(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        """Get one of the user's transactions.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else
        """
        txn = await self.repo.get_owned(transaction_id, user_id)
        if txn is None:
            raise NotFoundError(details={"transaction_id": str(transaction_id)})
        return txn

    async def update(
        self, user_id: UUID, transaction_id: UUID, fields: dict[str, Any]
    ) -> Transaction:
        """Replace all fields of one of the user's transactions.

        Args:
            user_id: Acting user
            transaction_id: Transaction to replace
            fields: type, amount, category, description and date

        Raises:
            ValidationError: If the new field set is invalid (nothing is written)
            NotFoundError: If it does not exist or belongs to someone else
        """
        kind, amount, category = self._validate(
            fields.get("type"), fields.get("amount"), fields.get("category")
        )
        logical_date = fields.get("date")
        if logical_date is None:
            raise ValidationError(message="Missing required fields: date")

        txn = await self.repo.update_owned(
            transaction_id,
            user_id,
            {
                "type": kind.value,
                "amount": amount,
                "category": category,
                "description": (fields.get("description") or "").strip(),
                "date": _as_utc(logical_date),
            },
        )
        if txn is None:
            raise NotFoundError(details={"transaction_id": str(transaction_id)})
        return txn

    async def delete(self, user_id: UUID, transaction_id: UUID) -> str:
        """Permanently delete one of the user's transactions.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else
        """
        deleted = await self.repo.delete_owned(transaction_id, user_id)
        if not deleted:
            raise NotFoundError(details={"transaction_id": str(transaction_id)})
        logger.info(
            "Transaction deleted",
            extra={"user_id": str(user_id), "transaction_id": str(transaction_id)},
        )
        return "Transaction deleted successfully"

    async def summarize(self, user_id: UUID) -> TransactionSummary:
        """Compute income, expense, balance and count over all of the user's transactions."""
        totals = await self.repo.get_totals(user_id)
        total_income = round(totals.total_income, 2)
        total_expense = round(totals.total_expense, 2)
        return TransactionSummary(
            total_income=total_income,
            total_expense=total_expense,
            balance=round(total_income - total_expense, 2),
            transaction_count=totals.count,
        )
