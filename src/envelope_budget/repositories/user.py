"""User repository for user-specific queries."""
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.models.user import User
from envelope_budget.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with identity and bank-link queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_subject(self, subject_id: str) -> User | None:
        """Find the user an identity-provider subject id belongs to."""
        result = await self.db.execute(select(User).where(User.subject_id == subject_id))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email is already registered."""
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None

    async def set_bank_link(self, user_id: UUID, access_token: str, item_id: str | None) -> None:
        """Store a new bank credential and invalidate the cursor issued under the old one."""
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(bank_access_token=access_token, bank_item_id=item_id, bank_cursor=None)
        )
        await self.db.commit()

    async def set_cursor(self, user_id: UUID, cursor: str | None) -> None:
        """Persist the feed cursor (last write wins)."""
        await self.db.execute(update(User).where(User.id == user_id).values(bank_cursor=cursor))
        await self.db.commit()
