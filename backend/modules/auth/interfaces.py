"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the session scheme without
touching the routes.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.accounts.models import AccountProfile, EnrichmentData
from shared.models import AuthenticatedUser

from .models import (
    AuthResult,
    ProfileUpdateRequest,
    ResendResult,
    SessionClaims,
    SignupRequest,
    SignupResult,
)


@runtime_checkable
class ISessionIssuer(Protocol):
    """
    Interface for session credentials.

    Any scheme satisfies the contract as long as issued credentials are
    unique and can be resolved back to the account id.
    """

    def issue(self, account_id: str, email: str = "", email_verified: bool = False) -> str:
        """Issue a new session credential for an account."""
        ...

    def decode(self, token: str) -> SessionClaims:
        """
        Resolve a credential back to its claims.

        Raises:
            MissingSessionError: If the token is empty
            InvalidSessionError: If the token is malformed, forged or expired
        """
        ...

    def authenticate(self, token: str) -> AuthenticatedUser:
        """Resolve a credential to the caller identity."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for the signup, verification and login workflow.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def signup(self, request: SignupRequest) -> SignupResult:
        """
        Register a new account and send its verification email.

        Raises:
            ValidationFailedError: With every violated rule
            DuplicateEmailError: If the email is taken and nothing else is wrong
        """
        ...

    async def verify_email(self, token: str) -> AuthResult:
        """
        Consume a verification token and sign the account in.

        Raises:
            InvalidOrExpiredTokenError: If no live account holds the token
        """
        ...

    async def resend_verification(self, email: str) -> ResendResult:
        """
        Replace the account's token and send a fresh verification email.

        Raises:
            AccountNotFoundError: If no account has this email
            AlreadyVerifiedError: If the account is already verified
        """
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate by email and password.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password
        """
        ...

    async def get_account(self, account_id: str) -> AccountProfile:
        """
        Raises:
            AccountNotFoundError: If the account no longer exists
        """
        ...

    async def update_profile(self, account_id: str, request: ProfileUpdateRequest) -> AccountProfile:
        """Apply profile editor changes. Omitted fields are left unchanged."""
        ...

    async def get_college_data(self, account_id: str) -> Optional[EnrichmentData]:
        """
        Raises:
            EmailNotVerifiedError: If the account has not verified its email
        """
        ...
