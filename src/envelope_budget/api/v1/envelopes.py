"""Envelope and envelope rule endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.api.deps import get_current_user, get_db
from envelope_budget.models.user import User
from envelope_budget.schemas.envelope import (
    EnvelopeCreate,
    EnvelopeDeleteResult,
    EnvelopeResponse,
    EnvelopeUpdate,
    RuleCreate,
    RuleResponse,
)
from envelope_budget.services.envelope import EnvelopeService

router = APIRouter(prefix="/envelopes", tags=["envelopes"])


@router.get(
    "",
    response_model=list[EnvelopeResponse],
    summary="List envelopes with balances",
    description="""
    All of the user's envelopes, oldest first.

    **current_balance** is derived on read: linked income adds, linked
    expenses subtract.
    """,
)
async def list_envelopes(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[EnvelopeResponse]:
    return await EnvelopeService(db).list_envelopes(current_user)


@router.post(
    "",
    response_model=EnvelopeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create envelope",
)
async def create_envelope(
    data: EnvelopeCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EnvelopeResponse:
    """
    Create an envelope, optionally with initial categorization rules.

    Raises:
        400: Invalid amount/refresh type, or a rule with no condition
        409: The same rule given twice
    """
    return await EnvelopeService(db).create_envelope(current_user, data)


@router.get("/{envelope_id}", response_model=EnvelopeResponse, summary="Get envelope")
async def get_envelope(
    envelope_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EnvelopeResponse:
    return await EnvelopeService(db).get_envelope(current_user, envelope_id)


@router.put("/{envelope_id}", response_model=EnvelopeResponse, summary="Update envelope")
async def update_envelope(
    envelope_id: UUID,
    data: EnvelopeUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EnvelopeResponse:
    """Partial update; omitted fields keep their values."""
    return await EnvelopeService(db).update_envelope(current_user, envelope_id, data)


@router.delete(
    "/{envelope_id}",
    response_model=EnvelopeDeleteResult,
    summary="Delete envelope",
    description="Deletes the envelope and its rules. Linked transactions are kept, unassigned.",
)
async def delete_envelope(
    envelope_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EnvelopeDeleteResult:
    await EnvelopeService(db).delete_envelope(current_user, envelope_id)
    return EnvelopeDeleteResult(id=envelope_id)


@router.get(
    "/{envelope_id}/rules",
    response_model=list[RuleResponse],
    summary="List envelope rules",
)
async def list_rules(
    envelope_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[RuleResponse]:
    rules = await EnvelopeService(db).get_rules(current_user, envelope_id)
    return [RuleResponse.model_validate(rule) for rule in rules]


@router.post(
    "/{envelope_id}/rules",
    response_model=RuleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add envelope rule",
)
async def add_rule(
    envelope_id: UUID,
    data: RuleCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RuleResponse:
    """
    Raises:
        400: Neither category nor merchant pattern given
        404: Envelope not found
        409: Identical rule already exists
    """
    rule = await EnvelopeService(db).add_rule(current_user, envelope_id, data)
    return RuleResponse.model_validate(rule)
