"""Schemas for per-user budgeting settings."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from envelope_budget.models.enums import IntervalType


class UserSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    email: str
    interval_type: IntervalType
    interval_start_date: date
    has_bank_link: bool = Field(description="Whether a bank account is linked")


class UserSettingsUpdate(BaseModel):
    """Partial settings update; omitted fields are left unchanged."""

    interval_type: IntervalType | None = None
    interval_start_date: date | None = None
