"""Shared persistence helpers for the model repositories."""
from typing import Any, Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(Generic[ModelT]):
    """Insert and field updates for one model class.

    Lookups and ownership checks live in the subclasses.
    """

    def __init__(self, db: AsyncSession, model: Type[ModelT]):
        self.db = db
        self.model = model

    async def create(self, obj: ModelT) -> ModelT:
        """Insert and commit; the returned object has its generated id and timestamps."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelT, changes: dict[str, Any]) -> ModelT:
        """Apply column changes to a loaded record and commit.

        Raises:
            AttributeError: If a key is not a column of the model
        """
        columns = self.model.__table__.columns
        for key, value in changes.items():
            if key not in columns:
                raise AttributeError(f"{self.model.__name__} has no column {key!r}")
            setattr(obj, key, value)

        await self.db.commit()
        await self.db.refresh(obj)
        return obj
