"""Categorization rule attached to an envelope."""
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from envelope_budget.models.base import BaseModel


class EnvelopeRule(BaseModel):
    """Category and/or merchant-substring predicate assigning transactions to an envelope."""

    __tablename__ = "envelope_rules"

    envelope_id: Mapped[UUID] = mapped_column(
        ForeignKey("envelopes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    merchant_pattern: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "envelope_id", "category", "merchant_pattern", name="uq_rule_envelope_category_pattern"
        ),
    )

    envelope: Mapped["Envelope"] = relationship("Envelope", back_populates="rules")

    def __repr__(self) -> str:
        return (
            f"<EnvelopeRule(id={self.id}, envelope_id={self.envelope_id}, "
            f"category={self.category}, merchant_pattern={self.merchant_pattern})>"
        )
