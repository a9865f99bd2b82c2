"""Database models."""
from clarity.models.transaction import Transaction
from clarity.models.user import User

__all__ = ["User", "Transaction"]
