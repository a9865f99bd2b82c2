"""Error codes and user-friendly messages.

Each entry in the catalog has:
- code: Unique identifier
- message: Technical description (for logs and API clients)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the request can be retried as-is
"""

ERROR_CATALOG: dict[str, dict] = {
    # Input validation
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "Invalid transaction type",
        "user_message": "Transaction type must be income or expense.",
        "suggestion": "Choose either income or expense.",
        "retry_allowed": False,
    },
    # Authentication
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Missing bearer token",
        "user_message": "Access denied. No token provided.",
        "suggestion": "Please log in and try again.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Invalid or expired token",
        "user_message": "Your session is invalid or has expired.",
        "suggestion": "Please log in again.",
        "retry_allowed": False,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Invalid email or password",
        "user_message": "Invalid email or password.",
        "suggestion": "Check your credentials and try again.",
        "retry_allowed": True,
    },
    "AUTH_004": {
        "code": "AUTH_004",
        "message": "Email already registered",
        "user_message": "An account with this email already exists.",
        "suggestion": "Log in instead, or sign up with a different email.",
        "retry_allowed": False,
    },
    # Transactions
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    # Categorization (absorbed by the resolver, logged only)
    "CAT_001": {
        "code": "CAT_001",
        "message": "Categorization backend failed",
        "user_message": "We couldn't suggest a category.",
        "suggestion": "Pick a category manually.",
        "retry_allowed": True,
    },
    # Storage
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

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details. Unknown codes map to a generic entry.
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
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]


def error_payload(error_code: str, message: str | None = None) -> dict:
    """Build the JSON body returned for an error code.

    Args:
        error_code: Error code from the catalog
        message: Optional override for the technical message

    Returns:
        Response body in the catalog shape
    """
    info = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or info["message"],
        "user_message": info["user_message"],
        "suggestion": info["suggestion"],
        "retry_allowed": info["retry_allowed"],
    }
