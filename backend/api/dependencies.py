"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Which store and which email dispatcher are used is decided here from
settings; services never look up their collaborators themselves.
"""

import logging
import random
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.accounts.interfaces import IAccountStore
    from modules.auth.interfaces import IAuthService, ISessionIssuer
    from modules.colleges.interfaces import IEmailClassifier
    from modules.enrichment.interfaces import IEnrichmentProvider
    from modules.notifications.interfaces import INotificationDispatcher
    from modules.posts.interfaces import IPostService, IPostStore

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._accounts: "IAccountStore | None" = None
        self._posts_store: "IPostStore | None" = None
        self._classifier: "IEmailClassifier | None" = None
        self._dispatcher: "INotificationDispatcher | None" = None
        self._enrichment: "IEnrichmentProvider | None" = None
        self._sessions: "ISessionIssuer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._post_service: "IPostService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def accounts(self) -> "IAccountStore":
        """Get the account store selected by `storage_backend`."""
        if self._accounts is None:
            if self.settings.storage_backend == "supabase":
                from modules.accounts.repository import SupabaseAccountStore
                from shared.database import get_supabase_client
                self._accounts = SupabaseAccountStore(get_supabase_client())
            else:
                from modules.accounts.memory_store import InMemoryAccountStore
                self._accounts = InMemoryAccountStore()
            logger.info(f"Using {self.settings.storage_backend} account store")
        return self._accounts

    @property
    def posts_store(self) -> "IPostStore":
        """Get the post store selected by `storage_backend`."""
        if self._posts_store is None:
            if self.settings.storage_backend == "supabase":
                from modules.posts.repository import SupabasePostStore
                from shared.database import get_supabase_client
                self._posts_store = SupabasePostStore(get_supabase_client())
            else:
                from modules.posts.memory_store import InMemoryPostStore
                self._posts_store = InMemoryPostStore()
        return self._posts_store

    @property
    def classifier(self) -> "IEmailClassifier":
        """Get the email classifier instance."""
        if self._classifier is None:
            from modules.colleges.classifier import get_email_classifier
            self._classifier = get_email_classifier()
        return self._classifier

    @property
    def dispatcher(self) -> "INotificationDispatcher":
        """Get the email dispatcher. Logs links instead of sending when SMTP is unset."""
        if self._dispatcher is None:
            settings = self.settings
            if settings.smtp_host:
                from modules.notifications.email import SmtpNotificationDispatcher
                self._dispatcher = SmtpNotificationDispatcher(
                    host=settings.smtp_host,
                    port=settings.smtp_port,
                    username=settings.smtp_username,
                    password=settings.smtp_password,
                    from_email=settings.email_from or settings.smtp_username,
                    from_name=settings.email_from_name,
                    frontend_url=settings.frontend_url,
                    use_tls=settings.smtp_use_tls,
                    token_ttl_hours=settings.verification_token_ttl_hours,
                )
            else:
                from modules.notifications.email import LoggingNotificationDispatcher
                logger.warning("SMTP_HOST not set - verification emails will only be logged")
                self._dispatcher = LoggingNotificationDispatcher(settings.frontend_url)
        return self._dispatcher

    @property
    def enrichment(self) -> "IEnrichmentProvider":
        """Get the college data provider instance."""
        if self._enrichment is None:
            from modules.enrichment.provider import CollegeDataProvider
            self._enrichment = CollegeDataProvider(rng=random.Random())
        return self._enrichment

    @property
    def sessions(self) -> "ISessionIssuer":
        """Get the session issuer instance."""
        if self._sessions is None:
            from modules.auth.sessions import JWTSessionIssuer
            settings = self.settings
            self._sessions = JWTSessionIssuer(
                secret=settings.session_jwt_secret,
                algorithm=settings.session_jwt_algorithm,
                ttl=timedelta(minutes=settings.session_ttl_minutes),
            )
        return self._sessions

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.models import VerificationFallback
            from modules.auth.passwords import PasswordHasher
            from modules.auth.service import AuthService
            from modules.auth.tokens import VerificationTokenGenerator
            settings = self.settings
            self._auth_service = AuthService(
                accounts=self.accounts,
                classifier=self.classifier,
                dispatcher=self.dispatcher,
                enrichment=self.enrichment,
                sessions=self.sessions,
                hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
                tokens=VerificationTokenGenerator(
                    ttl=timedelta(hours=settings.verification_token_ttl_hours),
                ),
                password_min_length=settings.password_min_length,
                fallback=VerificationFallback(settings.verification_fallback),
            )
        return self._auth_service

    @property
    def posts(self) -> "IPostService":
        """Get the post service instance."""
        if self._post_service is None:
            from modules.posts.service import PostService
            settings = self.settings
            self._post_service = PostService(
                posts=self.posts_store,
                accounts=self.accounts,
                max_length=settings.post_max_length,
                default_page_size=settings.feed_default_page_size,
            )
        return self._post_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._accounts = None
        self._posts_store = None
        self._classifier = None
        self._dispatcher = None
        self._enrichment = None
        self._sessions = None
        self._auth_service = None
        self._post_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_post_service() -> "IPostService":
    """FastAPI dependency for post service."""
    return get_container().posts


def get_session_issuer() -> "ISessionIssuer":
    """FastAPI dependency for session issuer."""
    return get_container().sessions


def get_email_classifier() -> "IEmailClassifier":
    """FastAPI dependency for email classifier."""
    return get_container().classifier


def get_account_store() -> "IAccountStore":
    """FastAPI dependency for account store (readiness checks)."""
    return get_container().accounts
