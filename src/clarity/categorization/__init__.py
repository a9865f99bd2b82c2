"""Transaction categorization.

Suggests one category from a closed, per-kind taxonomy for a free-text
description. The hosted model is optional: without it, or whenever it fails,
the suggestion is "Other".
"""

from .resolver import CategoryResolver, reconcile_category
from .taxonomy import DEFAULT_CATEGORY, TransactionKind, categories_for

__all__ = [
    "CategoryResolver",
    "reconcile_category",
    "DEFAULT_CATEGORY",
    "TransactionKind",
    "categories_for",
]
