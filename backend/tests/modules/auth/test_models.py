"""Tests for auth request and result models."""

import pytest
from pydantic import ValidationError

from modules.auth.models import (
    LoginRequest,
    ProfileUpdateRequest,
    SignupRequest,
    VerificationFallback,
)


class TestSignupRequest:
    def test_missing_fields_default_to_empty(self):
        """The service reports missing fields, so the model accepts them."""
        request = SignupRequest()
        assert request.full_name == ""
        assert request.email == ""
        assert request.password == ""
        assert request.confirm_password == ""

    def test_accepts_malformed_email(self):
        assert SignupRequest(email="not-an-email").email == "not-an-email"


class TestLoginRequest:
    def test_requires_email_shape(self):
        with pytest.raises(ValidationError):
            LoginRequest(email="not-an-email", password="secret1")


class TestProfileUpdateRequest:
    def test_tracks_only_provided_fields(self):
        request = ProfileUpdateRequest(program="Physics")
        assert request.model_dump(exclude_unset=True) == {"program": "Physics"}

    def test_blank_full_name_rejected(self):
        with pytest.raises(ValidationError):
            ProfileUpdateRequest(full_name="   ")

    def test_null_full_name_rejected(self):
        with pytest.raises(ValidationError):
            ProfileUpdateRequest.model_validate({"full_name": None})

    def test_full_name_trimmed(self):
        assert ProfileUpdateRequest(full_name="  Jane Doe ").full_name == "Jane Doe"

    def test_does_not_accept_credentials(self):
        request = ProfileUpdateRequest(email="x@y.edu", password_hash="h")  # type: ignore
        assert request.model_dump(exclude_unset=True) == {}


class TestVerificationFallback:
    def test_values_match_settings(self):
        assert VerificationFallback("auto_verify") is VerificationFallback.AUTO_VERIFY
        assert VerificationFallback("keep_pending") is VerificationFallback.KEEP_PENDING
