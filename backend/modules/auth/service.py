"""
Authentication service implementation.

Runs the account lifecycle: signup, email verification, resend, login and
the profile operations that hang off an authenticated account.
"""

import asyncio
import logging
from typing import Optional

from shared.clock import Clock, utcnow
from shared.exceptions import ExternalServiceError
from modules.accounts.exceptions import AccountNotFoundError, DuplicateEmailError
from modules.accounts.interfaces import IAccountStore
from modules.accounts.models import (
    Account,
    AccountProfile,
    AccountUpdate,
    EnrichmentData,
    NewAccount,
)
from modules.colleges.interfaces import IEmailClassifier
from modules.enrichment.interfaces import IEnrichmentProvider
from modules.enrichment.models import EnrichmentContext
from modules.notifications.interfaces import INotificationDispatcher

from .exceptions import (
    AlreadyVerifiedError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    ValidationFailedError,
)
from .interfaces import IAuthService, ISessionIssuer
from .models import (
    AuthResult,
    ProfileUpdateRequest,
    ResendResult,
    SignupRequest,
    SignupResult,
    VerificationFallback,
)
from .passwords import PasswordHasher
from .tokens import VerificationTokenGenerator

logger = logging.getLogger(__name__)

FULL_NAME_REQUIRED = "Please enter your full name"
EMAIL_REQUIRED = "Please enter your university email address"
EMAIL_INVALID = "Please enter a valid email address"
PASSWORD_REQUIRED = "Please create a password"
CONFIRMATION_REQUIRED = "Please confirm your password"
PASSWORDS_DO_NOT_MATCH = "The passwords you entered do not match"
EMAIL_ALREADY_REGISTERED = (
    "This email address is already registered. "
    "Please use a different email or try logging in."
)

SIGNUP_VERIFICATION_SENT = "Account created successfully. Please check your email to verify your account."
SIGNUP_AUTO_VERIFIED = (
    "Account created successfully. Email verification is temporarily unavailable, "
    "but you can proceed to your dashboard."
)
SIGNUP_PENDING = (
    "Account created successfully, but we could not send the verification email. "
    "Please request a new one."
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    All collaborators are passed in; nothing is looked up from module
    globals. The store enforces email uniqueness itself, so the existence
    check in `signup` only shapes the error response.
    """

    def __init__(
        self,
        accounts: IAccountStore,
        classifier: IEmailClassifier,
        dispatcher: INotificationDispatcher,
        enrichment: IEnrichmentProvider,
        sessions: ISessionIssuer,
        hasher: PasswordHasher,
        tokens: VerificationTokenGenerator,
        password_min_length: int = 6,
        fallback: VerificationFallback = VerificationFallback.AUTO_VERIFY,
        clock: Clock = utcnow,
    ):
        self._accounts = accounts
        self._classifier = classifier
        self._dispatcher = dispatcher
        self._enrichment = enrichment
        self._sessions = sessions
        self._hasher = hasher
        self._tokens = tokens
        self._password_min_length = password_min_length
        self._fallback = fallback
        self._clock = clock

    # =========================================================================
    # Signup and verification
    # =========================================================================

    async def signup(self, request: SignupRequest) -> SignupResult:
        full_name = request.full_name.strip()
        email = request.email.strip()

        errors = self._validate_signup(request)
        classification = self._classifier.classify(email)

        if email and classification.is_valid_format and self._accounts.exists_by_email(email):
            if not errors:
                raise DuplicateEmailError(email)
            errors.append(EMAIL_ALREADY_REGISTERED)

        if errors:
            logger.info(f"Signup rejected with {len(errors)} validation error(s)")
            raise ValidationFailedError(errors)

        # bcrypt is CPU bound
        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)
        token = self._tokens.generate()

        account = self._accounts.create(
            NewAccount(
                full_name=full_name,
                email=email,
                password_hash=password_hash,
                verification_token=token.token,
                verification_token_expires_at=token.expires_at,
                college=classification.college,
            )
        )
        logger.info(f"Created account {account.id} ({classification.status.value})")

        if await self._dispatch_verification(account.email, token.token):
            return SignupResult(
                message=SIGNUP_VERIFICATION_SENT,
                account=account.to_profile(),
                classification=classification,
                requires_verification=True,
                verification_sent=True,
            )

        if self._fallback == VerificationFallback.KEEP_PENDING:
            logger.warning(f"Verification email for account {account.id} not sent; account left pending")
            return SignupResult(
                message=SIGNUP_PENDING,
                account=account.to_profile(),
                classification=classification,
                requires_verification=True,
                verification_sent=False,
            )

        logger.warning(f"Verification email for account {account.id} not sent; marking account verified")
        account = self._accounts.update(
            account.id,
            AccountUpdate(
                is_email_verified=True,
                verification_token=None,
                verification_token_expires_at=None,
            ),
        )
        return SignupResult(
            message=SIGNUP_AUTO_VERIFIED,
            account=account.to_profile(),
            classification=classification,
            requires_verification=False,
            verification_sent=False,
            session_token=self._issue_session(account),
        )

    async def verify_email(self, token: str) -> AuthResult:
        token = (token or "").strip()
        if not token:
            raise InvalidOrExpiredTokenError("Verification token is required")

        account = self._accounts.find_by_token(token)
        if account is None or not account.has_live_token(token, self._clock()):
            raise InvalidOrExpiredTokenError()

        account = self._accounts.update(
            account.id,
            AccountUpdate(
                is_email_verified=True,
                verification_token=None,
                verification_token_expires_at=None,
            ),
        )
        logger.info(f"Verified email for account {account.id}")

        account = await self._enrich(account)

        return AuthResult(
            message="Email verified successfully",
            account=account.to_profile(),
            session_token=self._issue_session(account),
        )

    async def resend_verification(self, email: str) -> ResendResult:
        account = self._accounts.find_by_email(email)
        if account is None:
            raise AccountNotFoundError(email.strip())
        if account.is_email_verified:
            raise AlreadyVerifiedError(account.email)

        token = self._tokens.generate()
        self._accounts.update(
            account.id,
            AccountUpdate(
                verification_token=token.token,
                verification_token_expires_at=token.expires_at,
            ),
        )
        logger.info(f"Issued new verification token for account {account.id}")

        dispatched = await self._dispatch_verification(account.email, token.token)
        return ResendResult(
            message=(
                "Verification email sent successfully"
                if dispatched
                else "We could not send the verification email. Please try again later."
            ),
            dispatched=dispatched,
        )

    # =========================================================================
    # Login and profile
    # =========================================================================

    async def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise InvalidCredentialsError("Email and password are required")

        account = self._accounts.find_by_email(email)
        if account is None:
            logger.debug("Login failed: unknown email")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, password, account.password_hash)
        if not matches:
            logger.debug(f"Login failed for account {account.id}: wrong password")
            raise InvalidCredentialsError()

        logger.info(f"Account {account.id} logged in")
        return AuthResult(
            message="Login successful",
            account=account.to_profile(),
            session_token=self._issue_session(account),
        )

    async def get_account(self, account_id: str) -> AccountProfile:
        return self._require_account(account_id).to_profile()

    async def update_profile(self, account_id: str, request: ProfileUpdateRequest) -> AccountProfile:
        changes = AccountUpdate(**request.model_dump(exclude_unset=True))
        account = self._accounts.update(account_id, changes)
        logger.info(f"Updated profile fields {sorted(changes.model_fields_set)} for account {account_id}")
        return account.to_profile()

    async def get_college_data(self, account_id: str) -> Optional[EnrichmentData]:
        account = self._require_account(account_id)
        if not account.is_email_verified:
            raise EmailNotVerifiedError(account_id)
        return account.enrichment

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _validate_signup(self, request: SignupRequest) -> list[str]:
        """Collect every violated signup rule, in form order."""
        errors: list[str] = []
        email = request.email.strip()

        if not request.full_name.strip():
            errors.append(FULL_NAME_REQUIRED)
        if not email:
            errors.append(EMAIL_REQUIRED)
        elif not self._classifier.is_valid_format(email):
            errors.append(EMAIL_INVALID)
        if not request.password:
            errors.append(PASSWORD_REQUIRED)
        if not request.confirm_password:
            errors.append(CONFIRMATION_REQUIRED)
        if request.password != request.confirm_password:
            errors.append(PASSWORDS_DO_NOT_MATCH)
        if request.password and len(request.password) < self._password_min_length:
            errors.append(f"Password must be at least {self._password_min_length} characters long")

        return errors

    def _require_account(self, account_id: str) -> Account:
        account = self._accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _issue_session(self, account: Account) -> str:
        return self._sessions.issue(
            account.id,
            email=account.email,
            email_verified=account.is_email_verified,
        )

    async def _dispatch_verification(self, address: str, token: str) -> bool:
        try:
            return await self._dispatcher.send(address, token)
        except ExternalServiceError as e:
            logger.warning(f"Verification email dispatch failed: {e.message}")
            return False

    async def _enrich(self, account: Account) -> Account:
        """Attach enrichment data if the provider has any. Never fails verification."""
        try:
            data = await self._enrichment.fetch(EnrichmentContext.from_account(account))
        except ExternalServiceError as e:
            logger.warning(f"Enrichment failed for account {account.id}: {e.message}")
            return account

        if data is None:
            logger.debug(f"No enrichment data for account {account.id}")
            return account

        account = self._accounts.update(account.id, AccountUpdate(enrichment=data))
        logger.info(f"Attached enrichment data to account {account.id}")

        try:
            sent = await self._dispatcher.send_enrichment_summary(account.email, account.full_name, data)
        except ExternalServiceError as e:
            logger.warning(f"Enrichment summary email failed for account {account.id}: {e.message}")
        else:
            if not sent:
                logger.warning(f"Enrichment summary email not sent for account {account.id}")

        return account
