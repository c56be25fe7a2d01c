"""
Authentication module data models.

Request models accept raw strings on purpose: signup validation is done
by the service so that every violated rule can be reported at once.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from modules.accounts.models import AccountProfile
from modules.colleges.models import EmailClassification


class VerificationFallback(str, Enum):
    """
    What signup does when the verification email cannot be dispatched.

    AUTO_VERIFY favours availability: the account is verified immediately
    and a session is issued. KEEP_PENDING leaves the account unverified
    until a resend succeeds.
    """

    AUTO_VERIFY = "auto_verify"
    KEEP_PENDING = "keep_pending"


class VerificationToken(BaseModel):
    """A freshly generated verification token and its expiry."""

    model_config = {"frozen": True}

    token: str
    expires_at: datetime


class SessionClaims(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., description="Account ID")
    email: str = Field(default="", description="Account email")
    email_verified: bool = Field(default=False)
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: str = Field(..., description="Unique token ID")


class SignupRequest(BaseModel):
    """Signup form."""

    full_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    """Login form. Accounts are identified by email only."""

    email: EmailStr
    password: str


class VerifyEmailRequest(BaseModel):
    """Verification link payload."""

    token: str = ""


class ResendVerificationRequest(BaseModel):
    """Request for a new verification email."""

    email: EmailStr


class ProfileUpdateRequest(BaseModel):
    """Profile editor form. Omitted fields are left unchanged."""

    full_name: Optional[str] = Field(None, max_length=200)
    phone_number: Optional[str] = Field(None, max_length=32)
    university_name: Optional[str] = Field(None, max_length=200)
    university_id: Optional[str] = Field(None, max_length=64)
    program: Optional[str] = Field(None, max_length=200)
    year_of_study: Optional[str] = Field(None, max_length=16)

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: Optional[str]) -> str:
        # Only runs when the field is sent; omitting it leaves the name unchanged
        if value is None or not value.strip():
            raise ValueError("Full name cannot be empty")
        return value.strip()


class SignupResult(BaseModel):
    """Outcome of a successful signup."""

    message: str
    account: AccountProfile
    classification: EmailClassification
    requires_verification: bool
    verification_sent: bool
    session_token: Optional[str] = None


class AuthResult(BaseModel):
    """Outcome of a login or a successful verification."""

    message: str
    account: AccountProfile
    session_token: str


class ResendResult(BaseModel):
    """Outcome of a resend request."""

    message: str
    dispatched: bool
