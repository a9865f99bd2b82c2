"""Category suggestion for free-text transaction descriptions.

The hosted model answers in free text; ``reconcile_category`` maps that answer
back into the closed taxonomy, and ``CategoryResolver.resolve`` guarantees a
label from the taxonomy without ever raising.
"""

from __future__ import annotations

import asyncio
import logging

from langchain_core.prompts import PromptTemplate

from clarity.categorization.backends import CategorizationBackend
from clarity.categorization.taxonomy import (
    DEFAULT_CATEGORY,
    TransactionKind,
    categories_for,
)
from clarity.config import settings

logger = logging.getLogger(__name__)

CATEGORIZATION_PROMPT = PromptTemplate.from_template(
    """You are a financial assistant. Categorize the following transaction into ONE of these categories: {categories}.

Transaction details:
- Description: "{description}"
- Amount: ${amount}
- Type: {kind}

Respond with ONLY the category name from the list above, nothing else. No explanation."""
)


def build_prompt(description: str, amount: float | None, kind: TransactionKind) -> str:
    return CATEGORIZATION_PROMPT.format(
        categories=", ".join(categories_for(kind)),
        description=description.strip(),
        amount=0 if amount is None else amount,
        kind=kind.value,
    )


def reconcile_category(raw: str | None, kind: TransactionKind | str) -> str:
    """Map a model's raw answer onto the closed category set for ``kind``.

    1. Exact (case-sensitive) match on the trimmed answer.
    2. Case-insensitive containment in either direction; the first label in
       enumeration order wins.
    3. Otherwise the default category.
    """
    categories = categories_for(kind)
    answer = (raw or "").strip()
    if not answer:
        return DEFAULT_CATEGORY

    if answer in categories:
        return answer

    lowered = answer.lower()
    for category in categories:
        candidate = category.lower()
        if candidate in lowered or lowered in candidate:
            return category

    return DEFAULT_CATEGORY


class CategoryResolver:
    """Suggests a category, falling back to "Other" on any failure."""

    def __init__(
        self,
        backend: CategorizationBackend | None,
        timeout_seconds: float | None = None,
    ):
        self.backend = backend
        self.timeout_seconds = (
            settings.categorization_timeout_seconds
            if timeout_seconds is None
            else timeout_seconds
        )

    async def resolve(
        self,
        description: str | None,
        amount: float | None,
        kind: TransactionKind | str,
    ) -> str:
        """Return exactly one category label for the transaction.

        Args:
            description: Free-text description
            amount: Transaction amount, passed to the model for context
            kind: income or expense

        Returns:
            A label from the closed set for ``kind``
        """
        if not description or not description.strip():
            return DEFAULT_CATEGORY

        if self.backend is None:
            return DEFAULT_CATEGORY

        try:
            kind = TransactionKind(kind)
            prompt = build_prompt(description, amount, kind)
            raw = await asyncio.wait_for(
                self.backend.complete(prompt), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Categorization timed out, using fallback",
                extra={"error_code": "CAT_001"},
            )
            return DEFAULT_CATEGORY
        except Exception as e:
            logger.warning(
                f"Categorization failed, using fallback: {type(e).__name__}",
                extra={"error_code": "CAT_001", "error_type": type(e).__name__},
            )
            return DEFAULT_CATEGORY

        category = reconcile_category(raw, kind)
        if category != (raw or "").strip():
            logger.debug(f"Model suggested {raw!r}, reconciled to {category!r}")
        return category
