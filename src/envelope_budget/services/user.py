"""User settings service."""
from envelope_budget.core.exceptions import ValidationError
from envelope_budget.models.user import User
from envelope_budget.repositories.user import UserRepository
from envelope_budget.schemas.user import UserSettingsUpdate


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def update_settings(self, user: User, data: UserSettingsUpdate) -> User:
        """
        Change the budgeting interval type and/or its start date.

        Raises:
            ValidationError: If neither field is supplied
        """
        changes = data.model_dump(exclude_none=True)
        if not changes:
            raise ValidationError("VAL_002")
        return await self.user_repo.update(user, changes)
