"""Closed category taxonomy.

Categories are fixed per transaction kind and rendered by the client as a
select list. Enumeration order matters: when a model answer mentions more than
one label, the earlier label wins.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_CATEGORY = "Other"


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class ExpenseCategory(str, Enum):
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    OTHER = DEFAULT_CATEGORY


class IncomeCategory(str, Enum):
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investments"
    OTHER = DEFAULT_CATEGORY


_CATEGORIES: dict[TransactionKind, tuple[str, ...]] = {
    TransactionKind.EXPENSE: tuple(c.value for c in ExpenseCategory),
    TransactionKind.INCOME: tuple(c.value for c in IncomeCategory),
}


def categories_for(kind: TransactionKind | str) -> tuple[str, ...]:
    """Return the ordered category labels for a transaction kind.

    Raises:
        ValueError: If kind is not income or expense.
    """
    return _CATEGORIES[TransactionKind(kind)]


def is_known_category(category: str, kind: TransactionKind | str) -> bool:
    return category in categories_for(kind)
