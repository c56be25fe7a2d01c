"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    QuadError,
    ValidationError,
)


class TestQuadError:
    def test_stores_message(self):
        error = QuadError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code_is_class_name(self):
        assert QuadError("Test error").code == "QuadError"
        assert NotFoundError("missing").code == "NotFoundError"

    def test_custom_code_and_details(self):
        error = QuadError("Test error", code="CUSTOM_ERROR", details={"key": "value"})
        assert error.code == "CUSTOM_ERROR"
        assert error.details == {"key": "value"}

    def test_to_dict(self):
        error = QuadError("Test error", code="TEST_ERROR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_to_dict_minimal(self):
        assert QuadError("Test error").to_dict() == {
            "error": "QuadError",
            "message": "Test error",
            "details": {},
        }


class TestSubclasses:
    def test_all_inherit_quad_error(self):
        for error_type in (
            NotFoundError,
            ValidationError,
            ConflictError,
            AuthenticationError,
            AuthorizationError,
        ):
            assert isinstance(error_type("x"), QuadError)

    def test_validation_error_with_details(self):
        error = ValidationError("Bad input", details={"field": "email"})
        assert error.details["field"] == "email"


class TestExternalServiceError:
    def test_inherits_quad_error(self):
        assert isinstance(ExternalServiceError("Connection failed", service="smtp"), QuadError)

    def test_stores_service(self):
        error = ExternalServiceError("Connection failed", service="smtp")
        assert error.service == "smtp"
        assert error.to_dict()["details"]["service"] == "smtp"

    def test_preserves_other_details(self):
        error = ExternalServiceError("Connection failed", service="smtp", details={"status_code": 421})
        details = error.to_dict()["details"]
        assert details["service"] == "smtp"
        assert details["status_code"] == 421
