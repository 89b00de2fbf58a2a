"""Bank link service (Plaid Link token flow)."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.core.exceptions import ValidationError
from envelope_budget.feed import PlaidFeedClient
from envelope_budget.models.user import User
from envelope_budget.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class BankLinkService:
    def __init__(self, db: AsyncSession, client: PlaidFeedClient):
        self.client = client
        self.user_repo = UserRepository(db)

    async def create_link_token(self, user: User) -> str:
        return await self.client.create_link_token(str(user.id))

    async def create_sandbox_public_token(self) -> str:
        """
        Create a public token for a test institution without the Link UI.

        Raises:
            ValidationError: Outside the sandbox environment
        """
        if not self.client.is_sandbox:
            raise ValidationError("BANK_004", http_status=403)
        return await self.client.create_sandbox_public_token()

    async def link_account(self, user: User, public_token: str) -> None:
        """Exchange a public token and store the credential; the old cursor is discarded."""
        access_token, item_id = await self.client.exchange_public_token(public_token)
        await self.user_repo.set_bank_link(user.id, access_token, item_id)
        logger.info("Bank account linked", extra={"user_id": str(user.id)})
