"""Feed record schemas.

Amounts follow the feed's sign convention: positive means money left the
account. Locally the sign is carried by the transaction type instead, so the
conversion lives here next to the records.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from envelope_budget.models.enums import TransactionType


class FeedTransaction(BaseModel):
    """One added or modified transaction as reported by the feed."""

    transaction_id: str = Field(..., description="Feed-unique transaction identifier")
    amount: Decimal = Field(..., description="Signed amount, positive for money out")
    txn_date: date = Field(..., description="Posting date")
    name: str | None = Field(None, description="Raw transaction description")
    merchant_name: str | None = None
    detailed_category: str | None = Field(None, description="Feed's personal finance category")
    legacy_category: str | None = Field(None, description="Feed's older coarse category")
    pending: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def amount_from_float(cls, v: Any) -> Any:
        # Floats from JSON go through str() so 45.67 stays 45.67.
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @property
    def category(self) -> str | None:
        return self.detailed_category or self.legacy_category

    @property
    def magnitude(self) -> Decimal:
        return abs(self.amount)

    @property
    def transaction_type(self) -> TransactionType:
        return TransactionType.EXPENSE if self.amount > 0 else TransactionType.INCOME

    @classmethod
    def from_plaid(cls, data: dict[str, Any]) -> "FeedTransaction":
        """Build from a Plaid ``/transactions/sync`` transaction dict."""
        pfc = data.get("personal_finance_category") or {}
        legacy = data.get("category") or []
        return cls(
            transaction_id=data["transaction_id"],
            amount=data["amount"],
            txn_date=data["date"],
            name=data.get("name"),
            merchant_name=data.get("merchant_name"),
            detailed_category=pfc.get("primary"),
            legacy_category=legacy[0] if legacy else None,
            pending=bool(data.get("pending", False)),
        )


class FeedPage(BaseModel):
    """One page of the cursor-paged feed."""

    added: list[FeedTransaction] = Field(default_factory=list)
    modified: list[FeedTransaction] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list, description="Removed feed transaction ids")
    has_more: bool = False
    next_cursor: str | None = None

    @classmethod
    def from_plaid(cls, data: dict[str, Any]) -> "FeedPage":
        return cls(
            added=[FeedTransaction.from_plaid(tx) for tx in data.get("added") or []],
            modified=[FeedTransaction.from_plaid(tx) for tx in data.get("modified") or []],
            removed=[tx["transaction_id"] for tx in data.get("removed") or []],
            has_more=bool(data.get("has_more", False)),
            next_cursor=data.get("next_cursor"),
        )


class FeedSyncResult(BaseModel):
    """Everything read from the feed in one sync, plus the cursor to persist."""

    added: list[FeedTransaction] = Field(default_factory=list)
    modified: list[FeedTransaction] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    cursor: str | None = None
    pages: int = 0
