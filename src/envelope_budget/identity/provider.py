"""Identity provider interface and the bundled local implementation."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from envelope_budget.core.exceptions import AuthenticationError, ConflictError
from envelope_budget.core.security import (
    create_access_token,
    create_refresh_token,
    get_subject_from_token,
    hash_password,
    verify_password,
)
from envelope_budget.models.identity import Identity
from envelope_budget.repositories.identity import IdentityRepository

logger = logging.getLogger(__name__)


@dataclass
class AuthTokens:
    """Tokens issued after a successful sign-in."""

    access_token: str
    refresh_token: str
    subject: str


class IdentityProvider(Protocol):
    async def sign_up(self, email: str, password: str, name: str) -> str:
        """Create an identity and return its subject id."""
        ...

    async def authenticate(self, email: str, password: str) -> AuthTokens: ...

    async def refresh(self, refresh_token: str) -> AuthTokens: ...

    async def resolve_subject(self, bearer_token: str) -> str:
        """Resolve a bearer credential to a stable subject id."""
        ...


class LocalIdentityProvider:
    """Username/password identities stored alongside the app, with JWT bearer tokens."""

    def __init__(self, db: AsyncSession):
        self.identity_repo = IdentityRepository(db)

    async def sign_up(self, email: str, password: str, name: str) -> str:
        """
        Register a new identity.

        Raises:
            ConflictError: If the email already has an identity
        """
        if await self.identity_repo.get_by_email(email) is not None:
            raise ConflictError("USER_002")

        identity = await self.identity_repo.create(
            Identity(
                subject=str(uuid4()),
                email=email,
                password_hash=hash_password(password),
                display_name=name,
            )
        )
        logger.info("Identity created", extra={"subject": identity.subject})
        return identity.subject

    async def authenticate(self, email: str, password: str) -> AuthTokens:
        """
        Verify email and password.

        Raises:
            AuthenticationError: If the credentials are invalid
        """
        identity = await self.identity_repo.get_by_email(email)
        if identity is None or not verify_password(password, identity.password_hash):
            raise AuthenticationError("AUTH_002")
        return self._issue(identity.subject)

    async def refresh(self, refresh_token: str) -> AuthTokens:
        try:
            subject = get_subject_from_token(refresh_token, expected_type="refresh")
        except JWTError as exc:
            raise AuthenticationError("AUTH_001") from exc

        if await self.identity_repo.get_by_subject(subject) is None:
            raise AuthenticationError("AUTH_001")
        return self._issue(subject)

    async def resolve_subject(self, bearer_token: str) -> str:
        try:
            return get_subject_from_token(bearer_token, expected_type="access")
        except JWTError as exc:
            raise AuthenticationError("AUTH_001") from exc

    def _issue(self, subject: str) -> AuthTokens:
        return AuthTokens(
            access_token=create_access_token(subject),
            refresh_token=create_refresh_token(subject),
            subject=subject,
        )
