"""Authentication service: identity provider plus the local user profile."""

import logging
from datetime import date

from envelope_budget.config import settings
from envelope_budget.core.exceptions import ConflictError, NotFoundError
from envelope_budget.identity import AuthTokens, IdentityProvider
from envelope_budget.models.enums import IntervalType
from envelope_budget.models.user import User
from envelope_budget.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for registration, sign-in and bearer-token resolution."""

    def __init__(self, identity_provider: IdentityProvider, user_repo: UserRepository):
        """
        Initialize authentication service.

        Args:
            identity_provider: Issues and verifies credentials
            user_repo: User repository for database operations
        """
        self.identity_provider = identity_provider
        self.user_repo = user_repo

    async def register(self, email: str, password: str, name: str) -> User:
        """
        Register a new user.

        The identity is created first; the budgeting profile starts on a
        default interval beginning today.

        Raises:
            ConflictError: If email already exists
        """
        if await self.user_repo.email_exists(email):
            raise ConflictError("USER_002")

        subject = await self.identity_provider.sign_up(email, password, name)

        user = await self.user_repo.create(
            User(
                subject_id=subject,
                email=email,
                name=name,
                interval_type=IntervalType(settings.default_interval_type),
                interval_start_date=date.today(),
            )
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def login(self, email: str, password: str) -> tuple[AuthTokens, User]:
        """
        Authenticate with the identity provider and load the matching user.

        Raises:
            AuthenticationError: If credentials are invalid
            NotFoundError: If the identity has no budgeting profile
        """
        tokens = await self.identity_provider.authenticate(email, password)
        user = await self.user_repo.get_by_subject(tokens.subject)
        if user is None:
            raise NotFoundError("USER_001")
        return tokens, user

    async def refresh_tokens(self, refresh_token: str) -> AuthTokens:
        return await self.identity_provider.refresh(refresh_token)

    async def get_user_for_token(self, bearer_token: str) -> User:
        """
        Resolve a bearer credential to its user.

        Raises:
            AuthenticationError: If the token is invalid or expired
            NotFoundError: If no user exists for the token's subject
        """
        subject = await self.identity_provider.resolve_subject(bearer_token)
        user = await self.user_repo.get_by_subject(subject)
        if user is None:
            raise NotFoundError("USER_001")
        return user
