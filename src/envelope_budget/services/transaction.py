"""Transaction service: listing, manual entry, categorization and reallocation."""

import logging
from datetime import date, datetime, time, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.config import settings
from envelope_budget.core.exceptions import NotFoundError, ValidationError
from envelope_budget.models.enums import CategorizationSource, TransactionType
from envelope_budget.models.envelope_rule import EnvelopeRule
from envelope_budget.models.transaction import Transaction
from envelope_budget.models.user import User
from envelope_budget.repositories.envelope import EnvelopeRepository
from envelope_budget.repositories.envelope_rule import EnvelopeRuleRepository
from envelope_budget.repositories.transaction import TransactionRepository
from envelope_budget.schemas.transaction import (
    PeriodSummary,
    TransactionCreate,
    TransactionResponse,
)
from envelope_budget.services.period import current_period

logger = logging.getLogger(__name__)


def to_transaction_response(txn: Transaction, envelope_name: str | None = None) -> TransactionResponse:
    return TransactionResponse.model_validate(txn).model_copy(update={"envelope_name": envelope_name})


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class TransactionService:
    """Service layer for transaction operations initiated by the user."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.envelope_repo = EnvelopeRepository(db)
        self.rule_repo = EnvelopeRuleRepository(db)

    async def _get_owned_transaction(self, user: User, transaction_id: UUID) -> Transaction:
        txn = await self.transaction_repo.get_by_user(user.id, transaction_id)
        if txn is None:
            raise NotFoundError("TXN_001", details={"transaction_id": str(transaction_id)})
        return txn

    async def _get_owned_envelope_name(self, user: User, envelope_id: UUID) -> str:
        envelope = await self.envelope_repo.get_by_user(user.id, envelope_id)
        if envelope is None:
            raise NotFoundError("ENV_001", details={"envelope_id": str(envelope_id)})
        return envelope.name

    async def list_transactions(
        self,
        user: User,
        envelope_id: UUID | None = None,
        uncategorized: bool = False,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[TransactionResponse]:
        """List a user's transactions, newest first. Date bounds are inclusive days."""
        start = _start_of_day(start_date) if start_date else None
        end = datetime.combine(end_date, time.max, tzinfo=timezone.utc) if end_date else None
        rows = await self.transaction_repo.list_for_user(
            user.id, envelope_id=envelope_id, uncategorized=uncategorized, start=start, end=end
        )
        return [to_transaction_response(txn, name) for txn, name in rows]

    async def create_transaction(self, user: User, data: TransactionCreate) -> TransactionResponse:
        """
        Record a manual transaction.

        With an envelope, the transaction is categorized with source MANUAL.

        Raises:
            NotFoundError: If the envelope is not the user's
        """
        envelope_name = None
        if data.envelope_id is not None:
            envelope_name = await self._get_owned_envelope_name(user, data.envelope_id)

        txn = await self.transaction_repo.create(
            Transaction(
                user_id=user.id,
                envelope_id=data.envelope_id,
                occurred_at=data.occurred_at,
                amount=data.amount,
                type=data.type,
                description=data.description,
                merchant_name=data.merchant_name,
                is_categorized=data.envelope_id is not None,
                categorization_source=CategorizationSource.MANUAL if data.envelope_id else None,
            )
        )
        return to_transaction_response(txn, envelope_name)

    async def categorize(
        self, user: User, transaction_id: UUID, envelope_id: UUID, apply_rule: bool = False
    ) -> TransactionResponse:
        """
        Assign a transaction to an envelope by hand.

        With ``apply_rule`` and a known merchant, a (category, merchant) rule is
        added to the envelope; an identical existing rule is left as is.

        Raises:
            NotFoundError: If the transaction or envelope is not the user's
        """
        txn = await self._get_owned_transaction(user, transaction_id)
        envelope_name = await self._get_owned_envelope_name(user, envelope_id)

        txn.envelope_id = envelope_id
        txn.is_categorized = True
        txn.categorization_source = CategorizationSource.MANUAL

        if apply_rule and txn.merchant_name:
            if not await self.rule_repo.exists(envelope_id, txn.external_category, txn.merchant_name):
                self.db.add(
                    EnvelopeRule(
                        envelope_id=envelope_id,
                        category=txn.external_category,
                        merchant_pattern=txn.merchant_name,
                    )
                )
                logger.info(
                    "Rule learned from manual categorization",
                    extra={"user_id": str(user.id), "envelope_id": str(envelope_id)},
                )

        await self.db.commit()
        await self.db.refresh(txn)
        return to_transaction_response(txn, envelope_name)

    async def reallocate(
        self, user: User, transaction_id: UUID, envelope_id: UUID
    ) -> TransactionResponse:
        """
        Move an income transaction to another envelope.

        Raises:
            NotFoundError: If the transaction or envelope is not the user's
            ValidationError: If the transaction is not income
        """
        txn = await self._get_owned_transaction(user, transaction_id)
        if txn.type != TransactionType.INCOME:
            raise ValidationError("TXN_002")
        envelope_name = await self._get_owned_envelope_name(user, envelope_id)

        txn.envelope_id = envelope_id
        await self.db.commit()
        await self.db.refresh(txn)
        return to_transaction_response(txn, envelope_name)

    async def period_summary(self, user: User, today: date | None = None) -> PeriodSummary:
        """Income and expense totals for the user's current budgeting period."""
        start, end = current_period(user.interval_type, user.interval_start_date, today or date.today())
        totals = await self.transaction_repo.get_totals_by_type(
            user.id, _start_of_day(start), _start_of_day(end)
        )
        income = totals[TransactionType.INCOME]
        expenses = totals[TransactionType.EXPENSE]
        return PeriodSummary(
            period_start=start,
            period_end=end,
            income=income,
            expenses=expenses,
            net=income - expenses,
            currency=settings.currency,
        )
