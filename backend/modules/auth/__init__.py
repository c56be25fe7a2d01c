"""
Authentication module.

Handles the account lifecycle around a university email address:
signup, email verification, resend, login and session tokens.

Public API:
- IAuthService: Interface for the workflow
- ISessionIssuer: Interface for session credentials
- AuthService: Default workflow implementation
- JWTSessionIssuer: Signed stateless sessions
- PasswordHasher: bcrypt hashing
- VerificationTokenGenerator: Single-use verification tokens
- Exceptions: ValidationFailedError, InvalidOrExpiredTokenError, ...
"""

from .interfaces import IAuthService, ISessionIssuer
from .models import (
    AuthResult,
    LoginRequest,
    ProfileUpdateRequest,
    ResendResult,
    SessionClaims,
    SignupRequest,
    SignupResult,
    VerificationFallback,
    VerificationToken,
)
from .exceptions import (
    AlreadyVerifiedError,
    EmailNotVerifiedError,
    ExpiredSessionError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidSessionError,
    MissingSessionError,
    ValidationFailedError,
)
from .passwords import PasswordHasher
from .sessions import JWTSessionIssuer
from .tokens import VerificationTokenGenerator
from .service import AuthService

__all__ = [
    # Interfaces
    "IAuthService",
    "ISessionIssuer",
    # Implementations
    "AuthService",
    "JWTSessionIssuer",
    "PasswordHasher",
    "VerificationTokenGenerator",
    # Models
    "AuthResult",
    "LoginRequest",
    "ProfileUpdateRequest",
    "ResendResult",
    "SessionClaims",
    "SignupRequest",
    "SignupResult",
    "VerificationFallback",
    "VerificationToken",
    # Exceptions
    "AlreadyVerifiedError",
    "EmailNotVerifiedError",
    "ExpiredSessionError",
    "InvalidCredentialsError",
    "InvalidOrExpiredTokenError",
    "InvalidSessionError",
    "MissingSessionError",
    "ValidationFailedError",
]
