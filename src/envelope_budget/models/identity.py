"""Credential store for the local identity provider.

Budgeting tables never reference this table; they only know the subject id.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from envelope_budget.models.base import BaseModel


class Identity(BaseModel):
    """Username/password identity issued a stable subject id."""

    __tablename__ = "identities"

    subject: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Identity(subject={self.subject}, email={self.email})>"
