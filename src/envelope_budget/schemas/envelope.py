"""Schemas for envelope and envelope rule endpoints."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from envelope_budget.models.enums import AmountType, RefreshType


class RuleCreate(BaseModel):
    """A rule needs a category, a merchant pattern, or both."""

    category: str | None = Field(None, max_length=100, description="Feed category label")
    merchant_pattern: str | None = Field(
        None, max_length=255, description="Case-insensitive merchant substring"
    )

    @model_validator(mode="after")
    def blank_to_none(self) -> "RuleCreate":
        if self.category is not None and not self.category.strip():
            self.category = None
        if self.merchant_pattern is not None and not self.merchant_pattern.strip():
            self.merchant_pattern = None
        return self


class RuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    envelope_id: UUID
    category: str | None
    merchant_pattern: str | None
    created_at: datetime


class EnvelopeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    amount_type: AmountType
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    refresh_type: RefreshType
    rules: list[RuleCreate] = Field(default_factory=list)


class EnvelopeUpdate(BaseModel):
    """Partial envelope update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    amount_type: AmountType | None = None
    amount: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    refresh_type: RefreshType | None = None


class EnvelopeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    amount_type: AmountType
    amount: Decimal
    refresh_type: RefreshType
    current_balance: Decimal = Field(
        Decimal("0.00"), description="Income minus expenses linked to this envelope"
    )
    created_at: datetime
    updated_at: datetime


class EnvelopeDeleteResult(BaseModel):
    id: UUID
    message: str = "Envelope deleted successfully"
