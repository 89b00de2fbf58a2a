"""Exception hierarchy for budgeting operations.

Services raise these; the API layer turns them into JSON error bodies
using the catalog in errors.py.
"""

from typing import Any


class BudgetError(Exception):
    """Base exception for all domain errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "ENV_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return
    """

    default_status = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(error_code)


class ValidationError(BudgetError):
    """Missing or invalid input, rejected before any side effect."""

    default_status = 400


class AuthenticationError(BudgetError):
    """Bearer credential or username/password rejected by the identity provider."""

    default_status = 401


class NotFoundError(BudgetError):
    """Referenced record is absent or not owned by the caller."""

    default_status = 404


class ConflictError(BudgetError):
    """Uniqueness violation on a user-facing create."""

    default_status = 409


class UpstreamError(BudgetError):
    """An external collaborator (bank feed, identity provider) failed.

    The core never retries; the caller decides whether to try again.
    """

    default_status = 502
