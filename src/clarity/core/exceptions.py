"""Custom exception classes.

Each exception maps to an error code defined in errors.py and carries the
HTTP status the API boundary should answer with.
"""

from typing import Any


class ClarityError(Exception):
    """Base exception for all application errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "TXN_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
        message: str | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code
            message: Optional technical message overriding the catalog text
        """
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        self.message = message
        super().__init__(message or self.error_code)


class ValidationError(ClarityError):
    """Raised when input is missing or malformed.

    Never retried; reported as 400.
    """

    default_code = "VAL_001"
    default_status = 400


class AuthError(ClarityError):
    """Raised for missing, malformed, or expired credentials.

    Missing token maps to 401 (AUTH_001), an invalid token to 403 (AUTH_002).
    """

    default_code = "AUTH_002"
    default_status = 403


class NotFoundError(ClarityError):
    """Raised when a record is absent or not owned by the caller.

    The two cases are reported identically.
    """

    default_code = "TXN_001"
    default_status = 404


class CategorizationError(ClarityError):
    """Raised by a categorization backend when it cannot produce an answer.

    The category resolver absorbs it and falls back to "Other".
    """

    default_code = "CAT_001"
    default_status = 502
