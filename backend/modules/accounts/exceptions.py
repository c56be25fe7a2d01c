"""
Accounts module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class DuplicateEmailError(ConflictError):
    """Raised when an account with the same normalized email already exists."""

    def __init__(self, email: str):
        super().__init__(
            "This email address is already registered. "
            "Please use a different email or try logging in.",
            code="DUPLICATE_EMAIL",
            details={"email": email},
        )


class AccountNotFoundError(NotFoundError):
    """Raised when an account lookup that must succeed finds nothing."""

    def __init__(self, identifier: str):
        super().__init__(
            f"Account not found: {identifier}",
            code="ACCOUNT_NOT_FOUND",
            details={"identifier": identifier},
        )
