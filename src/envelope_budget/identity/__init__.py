"""Identity provider integration.

The budgeting core only consumes subject ids. Who issues and verifies the
bearer credentials is behind ``IdentityProvider``.
"""

from .provider import AuthTokens, IdentityProvider, LocalIdentityProvider

__all__ = ["AuthTokens", "IdentityProvider", "LocalIdentityProvider"]
