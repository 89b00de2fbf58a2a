"""Envelope service: CRUD, derived balances and categorization rules."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.core.exceptions import ConflictError, NotFoundError, ValidationError
from envelope_budget.models.envelope import Envelope
from envelope_budget.models.envelope_rule import EnvelopeRule
from envelope_budget.models.user import User
from envelope_budget.repositories.envelope import EnvelopeRepository
from envelope_budget.repositories.envelope_rule import EnvelopeRuleRepository
from envelope_budget.schemas.envelope import (
    EnvelopeCreate,
    EnvelopeResponse,
    EnvelopeUpdate,
    RuleCreate,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_envelope_response(envelope: Envelope, balance: Decimal) -> EnvelopeResponse:
    return EnvelopeResponse.model_validate(envelope).model_copy(
        update={"current_balance": balance.quantize(CENTS)}
    )


class EnvelopeService:
    """Service layer for envelope-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.envelope_repo = EnvelopeRepository(db)
        self.rule_repo = EnvelopeRuleRepository(db)

    async def get_owned(self, user: User, envelope_id: UUID) -> Envelope:
        """
        Get an envelope owned by the user.

        Raises:
            NotFoundError: If absent or owned by someone else
        """
        envelope = await self.envelope_repo.get_by_user(user.id, envelope_id)
        if envelope is None:
            raise NotFoundError("ENV_001", details={"envelope_id": str(envelope_id)})
        return envelope

    async def list_envelopes(self, user: User) -> list[EnvelopeResponse]:
        rows = await self.envelope_repo.get_all_with_balances(user.id)
        return [to_envelope_response(envelope, balance) for envelope, balance in rows]

    async def get_envelope(self, user: User, envelope_id: UUID) -> EnvelopeResponse:
        envelope = await self.get_owned(user, envelope_id)
        balance = await self.envelope_repo.get_balance(envelope.id)
        return to_envelope_response(envelope, balance)

    async def create_envelope(self, user: User, data: EnvelopeCreate) -> EnvelopeResponse:
        """
        Create an envelope together with its initial rules.

        Raises:
            ValidationError: If a rule has neither category nor merchant pattern
            ConflictError: If the same rule is given twice
        """
        seen: set[tuple[str | None, str | None]] = set()
        for rule in data.rules:
            self._check_rule(rule)
            key = (rule.category, rule.merchant_pattern)
            if key in seen:
                raise ConflictError("RULE_001")
            seen.add(key)

        envelope = Envelope(
            user_id=user.id,
            name=data.name,
            amount_type=data.amount_type,
            amount=data.amount,
            refresh_type=data.refresh_type,
        )
        self.db.add(envelope)
        await self.db.flush()
        for rule in data.rules:
            self.db.add(
                EnvelopeRule(
                    envelope_id=envelope.id,
                    category=rule.category,
                    merchant_pattern=rule.merchant_pattern,
                )
            )
        await self.db.commit()
        await self.db.refresh(envelope)

        logger.info(
            "Envelope created",
            extra={"user_id": str(user.id), "envelope_id": str(envelope.id), "rules": len(data.rules)},
        )
        return to_envelope_response(envelope, Decimal("0"))

    async def update_envelope(
        self, user: User, envelope_id: UUID, data: EnvelopeUpdate
    ) -> EnvelopeResponse:
        envelope = await self.get_owned(user, envelope_id)
        changes = data.model_dump(exclude_none=True)
        if changes:
            envelope = await self.envelope_repo.update(envelope, changes)
        balance = await self.envelope_repo.get_balance(envelope.id)
        return to_envelope_response(envelope, balance)

    async def delete_envelope(self, user: User, envelope_id: UUID) -> None:
        """Delete an envelope; its transactions are kept and left without an envelope."""
        envelope = await self.get_owned(user, envelope_id)
        await self.envelope_repo.delete_and_unlink(envelope.id)
        logger.info(
            "Envelope deleted", extra={"user_id": str(user.id), "envelope_id": str(envelope_id)}
        )

    async def get_rules(self, user: User, envelope_id: UUID) -> list[EnvelopeRule]:
        envelope = await self.get_owned(user, envelope_id)
        return await self.rule_repo.get_by_envelope(envelope.id)

    async def add_rule(self, user: User, envelope_id: UUID, data: RuleCreate) -> EnvelopeRule:
        """
        Attach a rule to an envelope.

        Raises:
            NotFoundError: If the envelope is not the user's
            ValidationError: If the rule has neither condition
            ConflictError: If the envelope already has this exact rule
        """
        envelope = await self.get_owned(user, envelope_id)
        self._check_rule(data)
        if await self.rule_repo.exists(envelope.id, data.category, data.merchant_pattern):
            raise ConflictError("RULE_001")
        return await self.rule_repo.create(
            EnvelopeRule(
                envelope_id=envelope.id,
                category=data.category,
                merchant_pattern=data.merchant_pattern,
            )
        )

    @staticmethod
    def _check_rule(rule: RuleCreate) -> None:
        if rule.category is None and rule.merchant_pattern is None:
            raise ValidationError("RULE_002")
