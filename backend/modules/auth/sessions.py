"""
Session issuer.

Sessions are stateless HS256 JWTs. Every token carries a random `jti`,
so two sessions issued in the same second for the same account still
differ.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt

from shared.clock import Clock, utcnow
from shared.models import AuthenticatedUser

from .exceptions import ExpiredSessionError, InvalidSessionError, MissingSessionError
from .interfaces import ISessionIssuer
from .models import SessionClaims

logger = logging.getLogger(__name__)


class JWTSessionIssuer(ISessionIssuer):
    """Issues and validates signed session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Clock = utcnow,
    ):
        if not secret:
            raise ValueError("Session signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, account_id: str, email: str = "", email_verified: bool = False) -> str:
        now = self._clock()
        payload = {
            "sub": account_id,
            "email": email,
            "email_verified": email_verified,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> SessionClaims:
        if not token:
            raise MissingSessionError()

        try:
            # Expiry is checked against the injected clock below
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp", "iat", "jti"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected session token: {e}")
            raise InvalidSessionError()

        claims = SessionClaims(**payload)
        if int(self._clock().timestamp()) >= claims.exp:
            raise ExpiredSessionError()
        return claims

    def authenticate(self, token: str) -> AuthenticatedUser:
        """Decode a token into the identity used by route handlers."""
        claims = self.decode(token)
        return AuthenticatedUser(
            id=claims.sub,
            email=claims.email,
            email_verified=claims.email_verified,
            issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
        )
