"""Envelope rule repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.models.envelope import Envelope
from envelope_budget.models.envelope_rule import EnvelopeRule
from envelope_budget.repositories.base import BaseRepository


class EnvelopeRuleRepository(BaseRepository[EnvelopeRule]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, EnvelopeRule)

    async def get_by_envelope(self, envelope_id: UUID) -> list[EnvelopeRule]:
        result = await self.db.execute(
            select(EnvelopeRule)
            .where(EnvelopeRule.envelope_id == envelope_id)
            .order_by(EnvelopeRule.created_at, EnvelopeRule.id)
        )
        return list(result.scalars().all())

    async def get_all_by_user(self, user_id: UUID) -> list[EnvelopeRule]:
        """
        Get every rule across a user's envelopes.

        Ordered by envelope creation, then rule creation, so the matcher's
        "first match wins" is stable between syncs.
        """
        result = await self.db.execute(
            select(EnvelopeRule)
            .join(Envelope, EnvelopeRule.envelope_id == Envelope.id)
            .where(Envelope.user_id == user_id)
            .order_by(Envelope.created_at, Envelope.id, EnvelopeRule.created_at, EnvelopeRule.id)
        )
        return list(result.scalars().all())

    async def exists(
        self, envelope_id: UUID, category: str | None, merchant_pattern: str | None
    ) -> bool:
        """
        Check for an identical (category, merchant_pattern) pair under an envelope.

        NULLs compare equal here, unlike in the unique constraint.
        """
        category_clause = (
            EnvelopeRule.category.is_(None) if category is None else EnvelopeRule.category == category
        )
        pattern_clause = (
            EnvelopeRule.merchant_pattern.is_(None)
            if merchant_pattern is None
            else EnvelopeRule.merchant_pattern == merchant_pattern
        )
        result = await self.db.execute(
            select(EnvelopeRule.id)
            .where(EnvelopeRule.envelope_id == envelope_id, category_clause, pattern_clause)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
