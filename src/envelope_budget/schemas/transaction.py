"""Transaction request/response schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from envelope_budget.models.enums import CategorizationSource, TransactionType


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    envelope_id: UUID | None
    envelope_name: str | None = None
    feed_transaction_id: str | None
    occurred_at: datetime
    amount: Decimal = Field(description="Magnitude; the sign is given by type")
    type: TransactionType
    description: str | None
    merchant_name: str | None
    external_category: str | None
    is_categorized: bool
    categorization_source: CategorizationSource | None


class TransactionCreate(BaseModel):
    """Manual transaction entry."""

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    type: TransactionType
    occurred_at: datetime
    description: str | None = Field(None, max_length=500)
    merchant_name: str | None = Field(None, max_length=255)
    envelope_id: UUID | None = None


class CategorizeRequest(BaseModel):
    envelope_id: UUID
    apply_rule: bool = Field(
        False, description="Also add a rule so future transactions from this merchant match"
    )


class ReallocateRequest(BaseModel):
    envelope_id: UUID


class PeriodSummary(BaseModel):
    """Income and expense totals for the user's current budgeting period."""

    period_start: date
    period_end: date = Field(description="Exclusive end of the period")
    income: Decimal
    expenses: Decimal
    net: Decimal
    currency: str
