"""Transaction endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.api.deps import get_current_user, get_db
from envelope_budget.models.user import User
from envelope_budget.schemas.transaction import (
    CategorizeRequest,
    PeriodSummary,
    ReallocateRequest,
    TransactionCreate,
    TransactionResponse,
)
from envelope_budget.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get(
    "",
    response_model=list[TransactionResponse],
    summary="List transactions with filters",
    description="""
    The user's transactions, newest first.

    ## Filters
    - **envelope_id**: Only transactions assigned to this envelope
    - **uncategorized**: Only transactions not yet assigned
    - **start_date**, **end_date**: Inclusive date range
    """,
)
async def list_transactions(
    envelope_id: Annotated[UUID | None, Query(description="Filter by envelope")] = None,
    uncategorized: Annotated[bool, Query(description="Only uncategorized")] = False,
    start_date: Annotated[date | None, Query(description="From date (inclusive)")] = None,
    end_date: Annotated[date | None, Query(description="To date (inclusive)")] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    return await TransactionService(db).list_transactions(
        current_user,
        envelope_id=envelope_id,
        uncategorized=uncategorized,
        start_date=start_date,
        end_date=end_date,
    )


@router.get(
    "/summary",
    response_model=PeriodSummary,
    summary="Current period totals",
    description="Income and expense totals for the user's current budgeting period.",
)
async def period_summary(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PeriodSummary:
    return await TransactionService(db).period_summary(current_user)


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a manual transaction",
)
async def create_transaction(
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """
    Raises:
        400: Missing amount, type or datetime
        404: Envelope not found
    """
    return await TransactionService(db).create_transaction(current_user, data)


@router.put(
    "/{transaction_id}/categorize",
    response_model=TransactionResponse,
    summary="Categorize transaction",
    description="Assign a transaction to an envelope; optionally learn a rule from it.",
)
async def categorize_transaction(
    transaction_id: UUID,
    data: CategorizeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    return await TransactionService(db).categorize(
        current_user, transaction_id, data.envelope_id, apply_rule=data.apply_rule
    )


@router.post(
    "/{transaction_id}/reallocate",
    response_model=TransactionResponse,
    summary="Reallocate income",
    description="Move an income transaction to a different envelope.",
)
async def reallocate_transaction(
    transaction_id: UUID,
    data: ReallocateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """
    Raises:
        400: Transaction is not income
        404: Transaction or envelope not found
    """
    return await TransactionService(db).reallocate(current_user, transaction_id, data.envelope_id)
