"""FastAPI dependency injection for authentication, database and the bank feed."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.config import settings
from envelope_budget.core.exceptions import AuthenticationError
from envelope_budget.db.session import get_db
from envelope_budget.feed import FeedReader, PlaidFeedClient, build_plaid_client
from envelope_budget.identity import IdentityProvider, LocalIdentityProvider
from envelope_budget.models.user import User
from envelope_budget.repositories.user import UserRepository
from envelope_budget.services.auth import AuthService

# auto_error=False so a missing header goes through the same AUTH_001 path.
security = HTTPBearer(auto_error=False)

__all__ = [
    "get_auth_service",
    "get_current_user",
    "get_db",
    "get_feed_client",
    "get_feed_reader",
    "get_identity_provider",
]


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return UserRepository(db)


async def get_identity_provider(
    db: AsyncSession = Depends(get_db),
) -> IdentityProvider:
    return LocalIdentityProvider(db)


async def get_auth_service(
    identity_provider: IdentityProvider = Depends(get_identity_provider),
    user_repo: UserRepository = Depends(get_user_repository),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        identity_provider: Credential issuer/verifier
        user_repo: User repository

    Returns:
        AuthService instance
    """
    return AuthService(identity_provider, user_repo)


@lru_cache
def get_feed_client() -> PlaidFeedClient:
    """Long-lived Plaid client, built on first use and shared by all requests."""
    return build_plaid_client(settings)


def get_feed_reader(client: PlaidFeedClient = Depends(get_feed_client)) -> FeedReader:
    return FeedReader(client)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the bearer token to the authenticated user.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
        NotFoundError: If the token's subject has no user
    """
    if credentials is None:
        raise AuthenticationError("AUTH_001")
    return await auth_service.get_user_for_token(credentials.credentials)
