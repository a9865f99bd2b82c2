"""Transaction endpoints.

Static paths (``/stats/summary``, ``/suggest-category``) are registered before
``/{transaction_id}`` so they are not captured by it.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from clarity.api.deps import (
    get_category_resolver,
    get_current_user,
    get_transaction_service,
)
from clarity.categorization.resolver import CategoryResolver
from clarity.models.user import User
from clarity.schemas.transaction import (
    CategorySuggestionRequest,
    CategorySuggestionResponse,
    DeleteResult,
    TransactionCreate,
    TransactionResponse,
    TransactionSummary,
    TransactionUpdate,
)
from clarity.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get(
    "",
    response_model=list[TransactionResponse],
    summary="List transactions",
    description="""
    List the authenticated user's transactions, newest first.

    ## Filters
    - **category**: exact category match
    - **startDate**, **endDate**: inclusive date range; either may be given alone
    """,
)
async def list_transactions(
    category: Annotated[str | None, Query(description="Filter by category")] = None,
    start_date: Annotated[
        date | None, Query(alias="startDate", description="Filter from date (inclusive)")
    ] = None,
    end_date: Annotated[
        date | None, Query(alias="endDate", description="Filter to date (inclusive)")
    ] = None,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> list[TransactionResponse]:
    transactions = await service.list_transactions(
        current_user.id,
        category=category,
        start_date=start_date,
        end_date=end_date,
    )
    return [TransactionResponse.model_validate(txn) for txn in transactions]


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
)
async def create_transaction(
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Create a transaction for the authenticated user.

    Raises:
        400: Missing or invalid fields
    """
    txn = await service.create(
        current_user.id,
        kind=data.type,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=data.date,
    )
    return TransactionResponse.model_validate(txn)


@router.get(
    "/stats/summary",
    response_model=TransactionSummary,
    summary="Balance summary",
    description="Total income, total expense, balance and count over all of the user's transactions.",
)
async def get_summary(
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionSummary:
    return await service.summarize(current_user.id)


@router.post(
    "/suggest-category",
    response_model=CategorySuggestionResponse,
    summary="Suggest a category",
    description="""
    Suggest one category for a description. Always answers with a category
    from the closed list for the given type; "Other" when no suggestion can
    be made.
    """,
)
async def suggest_category(
    data: CategorySuggestionRequest,
    current_user: User = Depends(get_current_user),
    resolver: CategoryResolver = Depends(get_category_resolver),
) -> CategorySuggestionResponse:
    category = await resolver.resolve(data.description, data.amount, data.type)
    return CategorySuggestionResponse(category=category)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get transaction",
)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Fetch one transaction owned by the caller.

    Raises:
        404: Not found or owned by another user
    """
    txn = await service.get(current_user.id, transaction_id)
    return TransactionResponse.model_validate(txn)


@router.put(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Replace transaction",
)
async def update_transaction(
    transaction_id: UUID,
    data: TransactionUpdate,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Replace all fields of a transaction.

    Raises:
        400: Missing or invalid fields
        404: Not found or owned by another user
    """
    txn = await service.update(current_user.id, transaction_id, data.model_dump())
    return TransactionResponse.model_validate(txn)


@router.delete(
    "/{transaction_id}",
    response_model=DeleteResult,
    summary="Delete transaction",
)
async def delete_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> DeleteResult:
    """
    Permanently delete a transaction.

    Raises:
        404: Not found or owned by another user
    """
    message = await service.delete(current_user.id, transaction_id)
    return DeleteResult(message=message)
