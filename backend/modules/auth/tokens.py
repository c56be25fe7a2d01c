"""
Verification token generation.
"""

import secrets
from datetime import timedelta

from shared.clock import Clock, utcnow

from .models import VerificationToken

# 32 random bytes, base64url encoded
TOKEN_BYTES = 32


class VerificationTokenGenerator:
    """Issues unguessable single-use tokens with a fixed lifetime."""

    def __init__(self, ttl: timedelta = timedelta(hours=24), clock: Clock = utcnow):
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def generate(self) -> VerificationToken:
        return VerificationToken(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            expires_at=self._clock() + self._ttl,
        )
