"""Error codes and user-friendly messages.

Each catalog entry has:
- code: Unique identifier
- message: Technical description (for logs and API clients)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the operation can be retried as-is
"""

ERROR_CATALOG: dict[str, dict] = {
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "No fields supplied for update",
        "user_message": "There was nothing to update.",
        "suggestion": "Change at least one field and save again.",
        "retry_allowed": False,
    },
    "USER_001": {
        "code": "USER_001",
        "message": "User not found",
        "user_message": "We couldn't find your account.",
        "suggestion": "Please sign in again.",
        "retry_allowed": False,
    },
    "USER_002": {
        "code": "USER_002",
        "message": "Email already registered",
        "user_message": "An account with this email already exists.",
        "suggestion": "Sign in instead, or use a different email address.",
        "retry_allowed": False,
    },
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Could not validate credentials",
        "user_message": "Your session is invalid or has expired.",
        "suggestion": "Please sign in again.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Incorrect email or password",
        "user_message": "Incorrect email or password.",
        "suggestion": "Check your credentials and try again.",
        "retry_allowed": True,
    },
    "ENV_001": {
        "code": "ENV_001",
        "message": "Envelope not found",
        "user_message": "We couldn't find this envelope.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "RULE_001": {
        "code": "RULE_001",
        "message": "Rule already exists for this envelope",
        "user_message": "This envelope already has an identical rule.",
        "suggestion": "Use a different category or merchant pattern.",
        "retry_allowed": False,
    },
    "RULE_002": {
        "code": "RULE_002",
        "message": "Rule requires a category or a merchant pattern",
        "user_message": "A rule needs a category, a merchant pattern, or both.",
        "suggestion": "Fill in at least one of the two fields.",
        "retry_allowed": False,
    },
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Only income transactions can be reallocated",
        "user_message": "Only income can be moved between envelopes this way.",
        "suggestion": "Use categorize for expense transactions.",
        "retry_allowed": False,
    },
    "BANK_001": {
        "code": "BANK_001",
        "message": "No bank account linked",
        "user_message": "You haven't linked a bank account yet.",
        "suggestion": "Link a bank account from the settings page.",
        "retry_allowed": False,
    },
    "BANK_002": {
        "code": "BANK_002",
        "message": "Bank feed request failed",
        "user_message": "We couldn't reach your bank right now.",
        "suggestion": "Please try syncing again in a few minutes.",
        "retry_allowed": True,
    },
    "BANK_003": {
        "code": "BANK_003",
        "message": "Bank link token request failed",
        "user_message": "We couldn't start the bank linking process.",
        "suggestion": "Please try again in a few minutes.",
        "retry_allowed": True,
    },
    "BANK_004": {
        "code": "BANK_004",
        "message": "Sandbox helpers are only available in sandbox mode",
        "user_message": "This action is not available.",
        "suggestion": "Link a real bank account instead.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists",
        "suggestion": "Please check if the record was already created",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic retryable definition.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]
