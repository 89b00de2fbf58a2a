"""Transaction model: manual entries and bank feed records."""
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from envelope_budget.models.base import BaseModel
from envelope_budget.models.enums import CategorizationSource, TransactionType


class Transaction(BaseModel):
    """Transaction whose sign is carried by ``type``; ``amount`` is always a magnitude."""

    __tablename__ = "transactions"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    envelope_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("envelopes.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Unique across the system so re-syncing the same feed page is a no-op.
    feed_transaction_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, native_enum=False, length=20), nullable=False
    )
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    merchant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    external_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_categorized: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    categorization_source: Mapped[CategorizationSource | None] = mapped_column(
        Enum(CategorizationSource, native_enum=False, length=20), nullable=True
    )

    __table_args__ = (
        Index("ix_transactions_user_id_occurred_at", "user_id", "occurred_at"),
    )

    user: Mapped["User"] = relationship("User", back_populates="transactions")

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.type}, amount={self.amount})>"
