"""Authentication endpoints for registration, login, and token management."""

from fastapi import APIRouter, Depends, status

from envelope_budget.api.deps import get_auth_service, get_current_user
from envelope_budget.models.user import User
from envelope_budget.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    TokenPair,
    UserRegister,
    UserResponse,
)
from envelope_budget.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an identity and a budgeting profile on a monthly interval starting today.",
)
async def register(
    data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Register a new user account.

    Raises:
        400: Validation error
        409: Email already registered
    """
    user = await auth_service.register(email=data.email, password=data.password, name=data.name)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    description="Authenticate with email and password to receive bearer tokens.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Authenticate user and return tokens with the user's profile.

    Raises:
        401: Invalid credentials
        404: Identity has no budgeting profile
    """
    tokens, user = await auth_service.login(email=data.email, password=data.password)
    return LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        user_id=user.id,
        email=user.email,
        name=user.name,
    )


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh access token",
)
async def refresh(
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    tokens = await auth_service.refresh_tokens(data.refresh_token)
    return TokenPair(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    return UserResponse.model_validate(current_user)
