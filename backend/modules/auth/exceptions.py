"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)


class ValidationFailedError(ValidationError):
    """
    Raised when signup input breaks one or more rules.

    Carries every violated rule, never just the first.
    """

    def __init__(self, errors: list[str]):
        super().__init__(
            "Validation failed",
            code="VALIDATION_FAILED",
            details={"errors": list(errors)},
        )
        self.errors = list(errors)


class InvalidOrExpiredTokenError(ValidationError):
    """Raised when a verification token is unknown, superseded or past expiry."""

    def __init__(self, message: str = "Invalid or expired verification token. Please request a new verification email."):
        super().__init__(message, code="INVALID_OR_EXPIRED_TOKEN")


class AlreadyVerifiedError(ConflictError):
    """Raised when a verification email is requested for a verified account."""

    def __init__(self, email: str):
        super().__init__(
            "Email already verified. You can log in directly.",
            code="ALREADY_VERIFIED",
            details={"email": email},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when login fails. Unknown email and wrong password look the same."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidSessionError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token", code: str = "INVALID_SESSION"):
        super().__init__(message, code=code)


class ExpiredSessionError(InvalidSessionError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="SESSION_EXPIRED")


class MissingSessionError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_SESSION")


class EmailNotVerifiedError(AuthorizationError):
    """Raised when an operation requires a verified email address."""

    def __init__(self, account_id: str):
        super().__init__(
            "Email verification required",
            code="EMAIL_NOT_VERIFIED",
            details={"account_id": account_id},
        )
