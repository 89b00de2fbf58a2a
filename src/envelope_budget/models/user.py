"""User model: budgeting profile keyed by the identity provider's subject id."""
from datetime import date

from sqlalchemy import Date, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from envelope_budget.models.base import BaseModel
from envelope_budget.models.enums import IntervalType


class User(BaseModel):
    """User model owning envelopes and transactions."""

    __tablename__ = "users"

    subject_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Bank link. The cursor is only meaningful for the access token it was issued under.
    bank_access_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_item_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bank_cursor: Mapped[str | None] = mapped_column(Text, nullable=True)

    interval_type: Mapped[IntervalType] = mapped_column(
        Enum(IntervalType, native_enum=False, length=20),
        default=IntervalType.MONTHLY,
        nullable=False,
    )
    interval_start_date: Mapped[date] = mapped_column(Date, default=lambda: date.today(), nullable=False)

    # Rely on DB-level ON DELETE CASCADE; prevent SQLAlchemy from NULLing FKs on delete.
    envelopes: Mapped[list["Envelope"]] = relationship(
        "Envelope", back_populates="user", lazy="raise", passive_deletes="all"
    )
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="user", lazy="raise", passive_deletes="all"
    )

    @property
    def has_bank_link(self) -> bool:
        return self.bank_access_token is not None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
