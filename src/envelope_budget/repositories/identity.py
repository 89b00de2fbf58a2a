"""Identity repository backing the local identity provider."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.models.identity import Identity
from envelope_budget.repositories.base import BaseRepository


class IdentityRepository(BaseRepository[Identity]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Identity)

    async def get_by_email(self, email: str) -> Identity | None:
        result = await self.db.execute(select(Identity).where(Identity.email == email))
        return result.scalar_one_or_none()

    async def get_by_subject(self, subject: str) -> Identity | None:
        result = await self.db.execute(select(Identity).where(Identity.subject == subject))
        return result.scalar_one_or_none()
