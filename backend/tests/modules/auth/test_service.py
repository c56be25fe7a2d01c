"""Tests for the signup, verification and login workflow."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.accounts.exceptions import AccountNotFoundError, DuplicateEmailError
from modules.accounts.memory_store import InMemoryAccountStore
from modules.accounts.models import AccountUpdate, EnrichmentData
from modules.auth.exceptions import (
    AlreadyVerifiedError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    ValidationFailedError,
)
from modules.auth.models import ProfileUpdateRequest, SignupRequest, VerificationFallback
from modules.auth.passwords import PasswordHasher
from modules.auth.service import (
    EMAIL_ALREADY_REGISTERED,
    FULL_NAME_REQUIRED,
    PASSWORDS_DO_NOT_MATCH,
    AuthService,
)
from modules.auth.sessions import JWTSessionIssuer
from modules.auth.tokens import VerificationTokenGenerator
from modules.colleges.classifier import CollegeEmailClassifier
from modules.colleges.models import ClassificationStatus
from modules.notifications.exceptions import NotificationDispatchError

from tests.conftest import (
    TEST_JWT_SECRET,
    FixedClock,
    RecordingDispatcher,
    StaticEnrichmentProvider,
)

ENRICHMENT = EnrichmentData(
    department="Computer Science",
    courses=["CS106A", "CS106B"],
    academic_year="2024-2025",
    semester="Spring",
    advisor="Dr. Emily Brown",
    gpa=3.4,
)


def signup_request(
    full_name: str = "Jane Doe",
    email: str = "jane@vit.ac.in",
    password: str = "secret1",
    confirm_password: str = None,
) -> SignupRequest:
    return SignupRequest(
        full_name=full_name,
        email=email,
        password=password,
        confirm_password=password if confirm_password is None else confirm_password,
    )


@pytest.fixture
def store(clock: FixedClock) -> InMemoryAccountStore:
    return InMemoryAccountStore(clock=clock)


@pytest.fixture
def enrichment() -> StaticEnrichmentProvider:
    return StaticEnrichmentProvider(ENRICHMENT)


@pytest.fixture
def sessions(clock: FixedClock) -> JWTSessionIssuer:
    return JWTSessionIssuer(secret=TEST_JWT_SECRET, clock=clock)


def build_service(store, dispatcher, enrichment, sessions, clock, **kwargs) -> AuthService:
    return AuthService(
        accounts=store,
        classifier=CollegeEmailClassifier(),
        dispatcher=dispatcher,
        enrichment=enrichment,
        sessions=sessions,
        hasher=PasswordHasher(rounds=4),
        tokens=VerificationTokenGenerator(ttl=timedelta(hours=24), clock=clock),
        clock=clock,
        **kwargs,
    )


@pytest.fixture
def service(store, dispatcher, enrichment, sessions, clock) -> AuthService:
    return build_service(store, dispatcher, enrichment, sessions, clock)


class TestSignup:
    @pytest.mark.asyncio
    async def test_creates_unverified_account_with_educational_classification(self, service, store, dispatcher, clock):
        result = await service.signup(signup_request("Jane Doe", "jane@vit.ac.in", "secret1"))

        assert result.requires_verification is True
        assert result.verification_sent is True
        assert result.session_token is None
        assert result.classification.status == ClassificationStatus.EDUCATIONAL
        assert result.account.is_email_verified is False
        assert result.account.college.name == "Vellore Institute of Technology"

        stored = store.find_by_email("jane@vit.ac.in")
        assert stored.verification_token == dispatcher.last_token
        assert stored.verification_token_expires_at == clock.now + timedelta(hours=24)
        assert dispatcher.sent == [("jane@vit.ac.in", stored.verification_token)]

    @pytest.mark.asyncio
    async def test_reports_every_violation_at_once(self, service, store):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.signup(signup_request(full_name="", password="abc", confirm_password="xyz"))

        errors = exc_info.value.errors
        assert FULL_NAME_REQUIRED in errors
        assert PASSWORDS_DO_NOT_MATCH in errors
        assert "Password must be at least 6 characters long" in errors
        assert len(errors) >= 3
        assert exc_info.value.details == {"errors": errors}
        assert store.list_all() == []

    @pytest.mark.asyncio
    async def test_all_fields_missing(self, service):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.signup(SignupRequest())

        assert exc_info.value.errors == [
            "Please enter your full name",
            "Please enter your university email address",
            "Please create a password",
            "Please confirm your password",
        ]

    @pytest.mark.asyncio
    async def test_malformed_email(self, service):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.signup(signup_request(email="jane.vit.ac.in"))

        assert exc_info.value.errors == ["Please enter a valid email address"]

    @pytest.mark.asyncio
    async def test_min_length_is_configurable(self, store, dispatcher, enrichment, sessions, clock):
        service = build_service(store, dispatcher, enrichment, sessions, clock, password_min_length=10)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.signup(signup_request(password="secret1"))

        assert exc_info.value.errors == ["Password must be at least 10 characters long"]

    @pytest.mark.asyncio
    async def test_non_educational_email_is_accepted(self, service):
        result = await service.signup(signup_request(email="jane@gmail.com"))
        assert result.classification.status == ClassificationStatus.NOT_EDUCATIONAL
        assert result.account.college is None

    @pytest.mark.asyncio
    async def test_sequential_duplicate(self, service):
        await service.signup(signup_request(email="dup@mit.edu"))

        with pytest.raises(DuplicateEmailError):
            await service.signup(signup_request(full_name="Other", email="dup@mit.edu"))

    @pytest.mark.asyncio
    async def test_duplicate_differing_only_in_case(self, service):
        await service.signup(signup_request(email="dup@mit.edu"))

        with pytest.raises(DuplicateEmailError):
            await service.signup(signup_request(email="  DUP@MIT.EDU "))

    @pytest.mark.asyncio
    async def test_duplicate_alongside_other_violations_is_listed(self, service):
        await service.signup(signup_request(email="dup@mit.edu"))

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.signup(signup_request(email="dup@mit.edu", password="abc"))

        assert EMAIL_ALREADY_REGISTERED in exc_info.value.errors
        assert "Password must be at least 6 characters long" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_concurrent_signups_create_one_account(self, service, store):
        results = await asyncio.gather(
            service.signup(signup_request(full_name="First", email="race@mit.edu")),
            service.signup(signup_request(full_name="Second", email="RACE@mit.edu")),
            service.signup(signup_request(full_name="Third", email="race@MIT.edu")),
            return_exceptions=True,
        )

        created = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, Exception)]
        assert len(created) == 1
        assert len(rejected) == 2
        assert all(isinstance(r, DuplicateEmailError) for r in rejected)
        assert len(store.list_all()) == 1

    @pytest.mark.asyncio
    async def test_plaintext_password_never_persisted(self, service, store):
        await service.signup(signup_request(password="correct-horse"))

        stored = store.find_by_email("jane@vit.ac.in")
        assert stored.password_hash != "correct-horse"
        assert "correct-horse" not in stored.model_dump_json()
        assert PasswordHasher().verify("correct-horse", stored.password_hash)

    @pytest.mark.asyncio
    async def test_profile_never_exposes_secrets(self, service):
        result = await service.signup(signup_request())
        dumped = result.model_dump()
        assert "password_hash" not in dumped["account"]
        assert "verification_token" not in dumped["account"]


class TestDispatchFallback:
    @pytest.mark.asyncio
    async def test_auto_verify_when_dispatch_fails(self, store, enrichment, sessions, clock):
        dispatcher = RecordingDispatcher(succeed=False)
        service = build_service(store, dispatcher, enrichment, sessions, clock)

        result = await service.signup(signup_request())

        assert result.requires_verification is False
        assert result.verification_sent is False
        assert result.account.is_email_verified is True
        assert sessions.decode(result.session_token).sub == result.account.id
        stored = store.find_by_id(result.account.id)
        assert stored.verification_token is None
        assert stored.verification_token_expires_at is None

    @pytest.mark.asyncio
    async def test_auto_verify_when_dispatcher_raises(self, store, enrichment, sessions, clock):
        dispatcher = MagicMock()
        dispatcher.send = AsyncMock(side_effect=NotificationDispatchError("jane@vit.ac.in", "timeout"))
        service = build_service(store, dispatcher, enrichment, sessions, clock)

        result = await service.signup(signup_request())

        assert result.account.is_email_verified is True
        assert result.session_token

    @pytest.mark.asyncio
    async def test_keep_pending_when_configured(self, store, enrichment, sessions, clock):
        dispatcher = RecordingDispatcher(succeed=False)
        service = build_service(
            store, dispatcher, enrichment, sessions, clock,
            fallback=VerificationFallback.KEEP_PENDING,
        )

        result = await service.signup(signup_request())

        assert result.requires_verification is True
        assert result.verification_sent is False
        assert result.session_token is None
        stored = store.find_by_id(result.account.id)
        assert stored.is_email_verified is False
        assert stored.verification_token == dispatcher.last_token

    @pytest.mark.asyncio
    async def test_keep_pending_account_can_verify_after_resend(self, store, enrichment, sessions, clock):
        dispatcher = RecordingDispatcher(succeed=False)
        service = build_service(
            store, dispatcher, enrichment, sessions, clock,
            fallback=VerificationFallback.KEEP_PENDING,
        )
        await service.signup(signup_request())

        dispatcher.succeed = True
        resend = await service.resend_verification("jane@vit.ac.in")
        verified = await service.verify_email(dispatcher.last_token)

        assert resend.dispatched is True
        assert verified.account.is_email_verified is True


class TestVerifyEmail:
    @pytest.mark.asyncio
    async def test_verifies_enriches_and_issues_session(self, service, store, dispatcher, enrichment, sessions):
        signup = await service.signup(signup_request())

        result = await service.verify_email(dispatcher.last_token)

        assert result.account.is_email_verified is True
        assert result.account.enrichment == ENRICHMENT
        claims = sessions.decode(result.session_token)
        assert claims.sub == signup.account.id
        assert claims.email_verified is True

        stored = store.find_by_id(signup.account.id)
        assert stored.verification_token is None
        assert stored.verification_token_expires_at is None
        assert enrichment.contexts[0].email == "jane@vit.ac.in"
        assert dispatcher.summaries == [("jane@vit.ac.in", "Jane Doe", ENRICHMENT)]

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, service, dispatcher):
        await service.signup(signup_request())
        token = dispatcher.last_token
        await service.verify_email(token)

        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email(token)

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, service, dispatcher, clock, store):
        await service.signup(signup_request())
        clock.advance(hours=24, seconds=1)

        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email(dispatcher.last_token)

        # The record still holds the token; only its expiry makes it dead
        assert store.find_by_token(dispatcher.last_token) is not None

    @pytest.mark.asyncio
    async def test_token_dead_at_exact_expiry(self, service, dispatcher, clock):
        await service.signup(signup_request())
        clock.advance(hours=24)

        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email(dispatcher.last_token)

    @pytest.mark.asyncio
    async def test_token_expired_one_second_ago(self, service, dispatcher, store, clock):
        signup = await service.signup(signup_request())
        store.update(signup.account.id, AccountUpdate(
            verification_token_expires_at=clock.now - timedelta(seconds=1),
        ))

        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email(dispatcher.last_token)

    @pytest.mark.asyncio
    async def test_unknown_and_blank_tokens(self, service):
        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email("no-such-token")
        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email("   ")

    @pytest.mark.asyncio
    async def test_no_enrichment_data_leaves_account_unenriched(self, store, dispatcher, sessions, clock):
        service = build_service(store, dispatcher, StaticEnrichmentProvider(None), sessions, clock)
        await service.signup(signup_request())

        result = await service.verify_email(dispatcher.last_token)

        assert result.account.is_email_verified is True
        assert result.account.enrichment is None
        assert dispatcher.summaries == []

    @pytest.mark.asyncio
    async def test_summary_email_failure_does_not_fail_verification(self, store, enrichment, sessions, clock):
        dispatcher = RecordingDispatcher()
        service = build_service(store, dispatcher, enrichment, sessions, clock)
        await service.signup(signup_request())
        dispatcher.send_enrichment_summary = AsyncMock(
            side_effect=NotificationDispatchError("jane@vit.ac.in", "down")
        )

        result = await service.verify_email(dispatcher.last_token)

        assert result.account.enrichment == ENRICHMENT


class TestResendVerification:
    @pytest.mark.asyncio
    async def test_overwrites_previous_token(self, service, dispatcher, store):
        await service.signup(signup_request())
        old_token = dispatcher.last_token

        result = await service.resend_verification("JANE@vit.ac.in")
        new_token = dispatcher.last_token

        assert result.dispatched is True
        assert new_token != old_token
        assert store.find_by_token(old_token) is None
        with pytest.raises(InvalidOrExpiredTokenError):
            await service.verify_email(old_token)
        assert (await service.verify_email(new_token)).account.is_email_verified

    @pytest.mark.asyncio
    async def test_resets_expiry(self, service, dispatcher, store, clock):
        await service.signup(signup_request())
        clock.advance(hours=23)

        await service.resend_verification("jane@vit.ac.in")

        stored = store.find_by_email("jane@vit.ac.in")
        assert stored.verification_token_expires_at == clock.now + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_unknown_email(self, service):
        with pytest.raises(AccountNotFoundError):
            await service.resend_verification("nobody@mit.edu")

    @pytest.mark.asyncio
    async def test_already_verified(self, service, dispatcher):
        await service.signup(signup_request())
        await service.verify_email(dispatcher.last_token)

        with pytest.raises(AlreadyVerifiedError):
            await service.resend_verification("jane@vit.ac.in")

    @pytest.mark.asyncio
    async def test_reports_failed_dispatch(self, service, dispatcher):
        await service.signup(signup_request())
        dispatcher.succeed = False

        result = await service.resend_verification("jane@vit.ac.in")

        assert result.dispatched is False


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_by_email(self, service, sessions):
        signup = await service.signup(signup_request(password="secret1"))

        result = await service.login("Jane@VIT.ac.in", "secret1")

        assert result.account.id == signup.account.id
        assert sessions.decode(result.session_token).email_verified is False

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, service):
        await service.signup(signup_request(password="secret1"))

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await service.login("jane@vit.ac.in", "wrong-password")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await service.login("nobody@vit.ac.in", "secret1")

        assert wrong_password.value.to_dict() == unknown_email.value.to_dict()

    @pytest.mark.asyncio
    async def test_full_name_is_not_a_login_identifier(self, service):
        await service.signup(signup_request(full_name="Jane Doe", password="secret1"))

        with pytest.raises(InvalidCredentialsError):
            await service.login("Jane Doe", "secret1")


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_account(self, service):
        signup = await service.signup(signup_request())
        profile = await service.get_account(signup.account.id)
        assert profile.email == "jane@vit.ac.in"

    @pytest.mark.asyncio
    async def test_get_missing_account(self, service):
        with pytest.raises(AccountNotFoundError):
            await service.get_account("missing")

    @pytest.mark.asyncio
    async def test_update_profile_changes_only_given_fields(self, service):
        signup = await service.signup(signup_request())

        profile = await service.update_profile(
            signup.account.id,
            ProfileUpdateRequest(program="Computer Science", year_of_study="2"),
        )

        assert profile.program == "Computer Science"
        assert profile.year_of_study == "2"
        assert profile.full_name == "Jane Doe"
        assert profile.university_name is None

    @pytest.mark.asyncio
    async def test_college_data_requires_verification(self, service, dispatcher):
        signup = await service.signup(signup_request())

        with pytest.raises(EmailNotVerifiedError):
            await service.get_college_data(signup.account.id)

        await service.verify_email(dispatcher.last_token)
        assert await service.get_college_data(signup.account.id) == ENRICHMENT
