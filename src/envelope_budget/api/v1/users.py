"""User settings endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.api.deps import get_current_user, get_db
from envelope_budget.models.user import User
from envelope_budget.repositories.user import UserRepository
from envelope_budget.schemas.user import UserSettingsResponse, UserSettingsUpdate
from envelope_budget.services.user import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/settings",
    response_model=UserSettingsResponse,
    summary="Get budgeting settings",
)
async def get_settings(
    current_user: User = Depends(get_current_user),
) -> UserSettingsResponse:
    return UserSettingsResponse.model_validate(current_user)


@router.put(
    "/settings",
    response_model=UserSettingsResponse,
    summary="Update budgeting settings",
    description="Change the budgeting interval type and/or its start date.",
)
async def update_settings(
    data: UserSettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UserSettingsResponse:
    """
    Raises:
        400: Neither field supplied
    """
    user = await UserService(UserRepository(db)).update_settings(current_user, data)
    return UserSettingsResponse.model_validate(user)
