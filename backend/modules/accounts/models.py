"""
Account data models.

`Account` is the full persisted record and is only handled inside the
backend. `AccountProfile` is the public projection returned by the API;
it never carries the password hash or the verification token.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from modules.colleges.models import CollegeInfo


def normalize_email(email: str) -> str:
    """Canonical form used for uniqueness checks and lookups."""
    return email.strip().lower()


class EnrichmentData(BaseModel):
    """Academic record attached to an account after verification."""

    department: str
    courses: list[str] = Field(default_factory=list)
    academic_year: str
    semester: str
    advisor: Optional[str] = None
    gpa: Optional[float] = Field(None, ge=0, le=4.0)


class NewAccount(BaseModel):
    """Fields supplied when creating an account. The store assigns the id."""

    full_name: str
    email: str
    password_hash: str
    is_email_verified: bool = False
    verification_token: Optional[str] = None
    verification_token_expires_at: Optional[datetime] = None
    college: Optional[CollegeInfo] = None


class Account(BaseModel):
    """A persisted user account."""

    id: str
    full_name: str
    email: str
    password_hash: str

    is_email_verified: bool = False
    verification_token: Optional[str] = None
    verification_token_expires_at: Optional[datetime] = None

    # Affiliation metadata, filled in from the profile editor
    phone_number: Optional[str] = None
    university_name: Optional[str] = None
    university_id: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None

    college: Optional[CollegeInfo] = None
    enrichment: Optional[EnrichmentData] = None

    created_at: datetime
    updated_at: datetime

    @property
    def normalized_email(self) -> str:
        return normalize_email(self.email)

    def has_live_token(self, token: str, now: datetime) -> bool:
        """True if `token` is the current token and `now` is strictly before its expiry."""
        return (
            self.verification_token is not None
            and self.verification_token == token
            and self.verification_token_expires_at is not None
            and now < self.verification_token_expires_at
        )

    def to_profile(self) -> "AccountProfile":
        return AccountProfile(
            id=self.id,
            full_name=self.full_name,
            email=self.email,
            is_email_verified=self.is_email_verified,
            phone_number=self.phone_number,
            university_name=self.university_name,
            university_id=self.university_id,
            program=self.program,
            year_of_study=self.year_of_study,
            college=self.college,
            enrichment=self.enrichment,
            created_at=self.created_at,
        )


class AccountProfile(BaseModel):
    """Public view of an account."""

    id: str
    full_name: str
    email: str
    is_email_verified: bool
    phone_number: Optional[str] = None
    university_name: Optional[str] = None
    university_id: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None
    college: Optional[CollegeInfo] = None
    enrichment: Optional[EnrichmentData] = None
    created_at: datetime


class AccountUpdate(BaseModel):
    """
    Partial update of an account.

    Only fields that were explicitly set are applied, so passing
    `verification_token=None` clears the token while omitting it leaves
    it untouched.
    """

    full_name: Optional[str] = None
    password_hash: Optional[str] = None
    is_email_verified: Optional[bool] = None
    verification_token: Optional[str] = None
    verification_token_expires_at: Optional[datetime] = None
    phone_number: Optional[str] = None
    university_name: Optional[str] = None
    university_id: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None
    college: Optional[CollegeInfo] = None
    enrichment: Optional[EnrichmentData] = None

    @field_validator("full_name", "password_hash", "is_email_verified")
    @classmethod
    def required_fields_not_null(cls, value):
        # Explicit None would clear a NOT NULL column
        if value is None:
            raise ValueError("cannot be cleared")
        return value

    def changes(self) -> dict:
        """Explicitly set fields as a dict, nested models included as models."""
        return {name: getattr(self, name) for name in self.model_fields_set}
