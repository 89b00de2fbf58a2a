"""Envelope model: a named budget bucket owned by one user."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from envelope_budget.models.base import BaseModel
from envelope_budget.models.enums import AmountType, RefreshType


class Envelope(BaseModel):
    """Envelope with an allocation; its balance is derived from linked transactions."""

    __tablename__ = "envelopes"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount_type: Mapped[AmountType] = mapped_column(
        Enum(AmountType, native_enum=False, length=30), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    refresh_type: Mapped[RefreshType] = mapped_column(
        Enum(RefreshType, native_enum=False, length=20), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="envelopes")
    rules: Mapped[list["EnvelopeRule"]] = relationship(
        "EnvelopeRule", back_populates="envelope", lazy="raise", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Envelope(id={self.id}, name={self.name}, amount={self.amount})>"
