"""Transaction repository with filtering, feed upserts and aggregation queries."""
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.models.envelope import Envelope
from envelope_budget.models.enums import TransactionType
from envelope_budget.models.transaction import Transaction
from envelope_budget.repositories.base import BaseRepository

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with user-scoped and feed-keyed queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_user(self, user_id: UUID, transaction_id: UUID) -> Transaction | None:
        """Get transaction only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id, Transaction.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_feed_id(self, feed_transaction_id: str) -> Transaction | None:
        result = await self.db.execute(
            select(Transaction).where(Transaction.feed_transaction_id == feed_transaction_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UUID,
        envelope_id: UUID | None = None,
        uncategorized: bool = False,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[tuple[Transaction, str | None]]:
        """
        Get a user's transactions, newest first, each paired with its envelope name.
        """
        query = (
            select(Transaction, Envelope.name)
            .outerjoin(Envelope, Transaction.envelope_id == Envelope.id)
            .where(Transaction.user_id == user_id)
        )
        if envelope_id is not None:
            query = query.where(Transaction.envelope_id == envelope_id)
        if uncategorized:
            query = query.where(Transaction.is_categorized == False)  # noqa: E712
        if start is not None:
            query = query.where(Transaction.occurred_at >= start)
        if end is not None:
            query = query.where(Transaction.occurred_at <= end)

        result = await self.db.execute(
            query.order_by(Transaction.occurred_at.desc(), Transaction.created_at.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    async def insert_if_absent(self, values: dict[str, Any]) -> bool:
        """
        Insert a feed transaction keyed by ``feed_transaction_id``.

        A row with the same feed id already present makes this a no-op.
        Does not commit.

        Returns:
            True if a row was inserted
        """
        dialect = self.db.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Idempotent insert not supported for dialect {dialect!r}")

        stmt = (
            insert(Transaction.__table__)
            .values(**values)
            .on_conflict_do_nothing(index_elements=["feed_transaction_id"])
        )
        result = await self.db.execute(stmt)
        return bool(result.rowcount)

    async def update_by_feed_id(self, feed_transaction_id: str, values: dict[str, Any]) -> int:
        """Update the mutable fields of a feed transaction. Does not commit."""
        result = await self.db.execute(
            update(Transaction)
            .where(Transaction.feed_transaction_id == feed_transaction_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_by_feed_ids(self, feed_transaction_ids: list[str]) -> int:
        """Delete local copies of removed feed transactions. Does not commit."""
        if not feed_transaction_ids:
            return 0
        result = await self.db.execute(
            delete(Transaction)
            .where(Transaction.feed_transaction_id.in_(feed_transaction_ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def get_totals_by_type(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> dict[TransactionType, Decimal]:
        """
        Sum income and expense magnitudes for a user within [start, end).
        """
        result = await self.db.execute(
            select(Transaction.type, func.sum(Transaction.amount).label("total"))
            .where(
                Transaction.user_id == user_id,
                Transaction.occurred_at >= start,
                Transaction.occurred_at < end,
            )
            .group_by(Transaction.type)
        )
        totals = {txn_type: Decimal("0") for txn_type in TransactionType}
        for row in result:
            totals[row.type] = Decimal(str(row.total or 0)).quantize(Decimal("0.01"))
        return totals
