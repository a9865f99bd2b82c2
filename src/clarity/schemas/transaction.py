"""Transaction request/response schemas.

Field names are camelCase on the wire; snake_case is accepted on input.
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from clarity.categorization.taxonomy import TransactionKind
from clarity.models.transaction import MAX_AMOUNT


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TransactionCreate(CamelModel):
    """Request to create a transaction."""

    type: TransactionKind = Field(description="income or expense")
    amount: float = Field(
        ge=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Non-negative amount"
    )
    category: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    date: datetime | None = Field(default=None, description="Logical date (defaults to now)")


class TransactionUpdate(CamelModel):
    """Full replacement of a transaction's fields."""

    type: TransactionKind
    amount: float = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    category: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    date: datetime


class TransactionResponse(CamelModel):
    # The client keys transactions by "_id"
    id: UUID = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    user_id: UUID
    type: str
    amount: float
    category: str
    description: str
    date: datetime
    created_at: datetime
    updated_at: datetime


class TransactionSummary(CamelModel):
    total_income: float
    total_expense: float
    balance: float
    transaction_count: int


class DeleteResult(BaseModel):
    message: str


class CategorySuggestionRequest(CamelModel):
    description: str = Field(min_length=1, max_length=500)
    amount: float | None = None
    type: TransactionKind


class CategorySuggestionResponse(BaseModel):
    category: str
