"""Envelope repository with user-scoped queries and derived balances."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.models.envelope import Envelope
from envelope_budget.models.envelope_rule import EnvelopeRule
from envelope_budget.models.enums import TransactionType
from envelope_budget.models.transaction import Transaction
from envelope_budget.repositories.base import BaseRepository

# Income adds to an envelope, expenses subtract.
SIGNED_AMOUNT = case(
    (Transaction.type == TransactionType.EXPENSE, -Transaction.amount),
    (Transaction.type == TransactionType.INCOME, Transaction.amount),
    else_=0,
)


class EnvelopeRepository(BaseRepository[Envelope]):
    """Repository for Envelope model with user-scoped security."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Envelope)

    async def get_by_user(self, user_id: UUID, envelope_id: UUID) -> Envelope | None:
        """Get envelope only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Envelope).where(Envelope.id == envelope_id, Envelope.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_all_with_balances(self, user_id: UUID) -> list[tuple[Envelope, Decimal]]:
        """Get all envelopes for a user, oldest first, each paired with its current balance."""
        result = await self.db.execute(
            select(Envelope, func.coalesce(func.sum(SIGNED_AMOUNT), 0).label("current_balance"))
            .outerjoin(Transaction, Transaction.envelope_id == Envelope.id)
            .where(Envelope.user_id == user_id)
            .group_by(Envelope.id)
            .order_by(Envelope.created_at, Envelope.id)
        )
        return [(row[0], Decimal(str(row[1] or 0))) for row in result.all()]

    async def get_balance(self, envelope_id: UUID) -> Decimal:
        """Signed sum of the transactions linked to one envelope."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(SIGNED_AMOUNT), 0)).where(
                Transaction.envelope_id == envelope_id
            )
        )
        return Decimal(str(result.scalar_one() or 0))

    async def delete_and_unlink(self, envelope_id: UUID) -> None:
        """Delete an envelope and its rules; linked transactions are kept with no envelope."""
        await self.db.execute(
            update(Transaction)
            .where(Transaction.envelope_id == envelope_id)
            .values(envelope_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(delete(EnvelopeRule).where(EnvelopeRule.envelope_id == envelope_id))
        await self.db.execute(delete(Envelope).where(Envelope.id == envelope_id))
        await self.db.commit()
