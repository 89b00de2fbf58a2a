"""Transaction sync and auto-categorization.

Workflow for one user:
1. Read every page of the bank feed from the stored cursor
2. Persist the new cursor
3. Load the user's rules once
4. Insert added, non-pending records (auto-assigning envelopes by rule)
5. Update modified records
6. Delete removed records

The cursor and each apply step (4, 5, 6) are committed separately. A failure
in a later step keeps the earlier steps, but a retry resumes from the new
cursor, so records the failed step did not apply are not fetched again.
"""

import logging
from datetime import datetime, time, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.categorization import find_envelope
from envelope_budget.core.exceptions import ValidationError
from envelope_budget.feed import FeedReader, FeedTransaction
from envelope_budget.models.enums import CategorizationSource
from envelope_budget.models.user import User
from envelope_budget.repositories.envelope_rule import EnvelopeRuleRepository
from envelope_budget.repositories.transaction import TransactionRepository
from envelope_budget.repositories.user import UserRepository
from envelope_budget.schemas.bank import SyncResult

logger = logging.getLogger(__name__)


def _occurred_at(txn: FeedTransaction) -> datetime:
    return datetime.combine(txn.txn_date, time.min, tzinfo=timezone.utc)


def mutable_fields(txn: FeedTransaction) -> dict[str, Any]:
    """Fields a feed record may change after first being reported."""
    return {
        "occurred_at": _occurred_at(txn),
        "amount": txn.magnitude,
        "type": txn.transaction_type,
        "description": txn.name,
        "merchant_name": txn.merchant_name,
        "external_category": txn.category,
    }


class SyncReconciler:
    """Brings a user's local transactions into agreement with the bank feed."""

    def __init__(self, db: AsyncSession, reader: FeedReader):
        self.db = db
        self.reader = reader
        self.user_repo = UserRepository(db)
        self.rule_repo = EnvelopeRuleRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def sync_user(self, user: User) -> SyncResult:
        """Run one sync for ``user``.

        Returns:
            Counts of added, modified and removed records received from the feed

        Raises:
            ValidationError: If the user has no linked bank account
            UpstreamError: If any feed page request fails (cursor unchanged)
        """
        if not user.bank_access_token:
            raise ValidationError("BANK_001")

        log_extra = {"user_id": str(user.id)}
        logger.info("Starting transaction sync", extra=log_extra)

        feed = await self.reader.read_all(user.bank_access_token, user.bank_cursor)
        await self.user_repo.set_cursor(user.id, feed.cursor)

        rules = await self.rule_repo.get_all_by_user(user.id)

        inserted = 0
        skipped_pending = 0
        for txn in feed.added:
            if txn.pending:
                skipped_pending += 1
                continue
            values = self._new_transaction_values(user, txn, rules)
            if await self.transaction_repo.insert_if_absent(values):
                inserted += 1
        await self.db.commit()

        for txn in feed.modified:
            await self.transaction_repo.update_by_feed_id(txn.transaction_id, mutable_fields(txn))
        await self.db.commit()

        deleted = await self.transaction_repo.delete_by_feed_ids(feed.removed)
        await self.db.commit()

        logger.info(
            "Transaction sync complete",
            extra={
                **log_extra,
                "inserted": inserted,
                "skipped_pending": skipped_pending,
                "duplicates": len(feed.added) - skipped_pending - inserted,
                "modified": len(feed.modified),
                "deleted": deleted,
            },
        )
        return SyncResult(
            added_count=len(feed.added),
            modified_count=len(feed.modified),
            removed_count=len(feed.removed),
        )

    @staticmethod
    def _new_transaction_values(user: User, txn: FeedTransaction, rules) -> dict[str, Any]:
        envelope_id = find_envelope(rules, txn.category, txn.merchant_name, txn.name)
        return {
            "user_id": user.id,
            "feed_transaction_id": txn.transaction_id,
            **mutable_fields(txn),
            "envelope_id": envelope_id,
            "is_categorized": envelope_id is not None,
            "categorization_source": CategorizationSource.AUTO if envelope_id else None,
        }
