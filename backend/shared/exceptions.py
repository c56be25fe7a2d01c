"""
Error taxonomy for the Quad backend.

Two families share one base:

- business errors: the request itself cannot be honoured (bad signup
  input, a duplicate email, a dead verification link, wrong credentials,
  an unverified account). The caller can act on them, so their message and
  details reach the client.
- infrastructure errors (`ExternalServiceError`): the store or the mail
  server failed. The client only learns that it should try again.

The API layer picks the HTTP status from the base class alone, so module
exceptions only choose a base, a stable `code` and their `details`.
"""

from typing import Optional, Any


class QuadError(Exception):
    """
    Root of every error the API renders.

    `code` is the machine readable identifier clients switch on;
    `details` carries structured context such as the violated rules.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Body of the error response."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(QuadError):
    """An account, post or other record the request names does not exist."""


class ValidationError(QuadError):
    """The request breaks an input rule. Rendered as 400."""


class ConflictError(QuadError):
    """The request contradicts stored state, e.g. an email already registered."""


class AuthenticationError(QuadError):
    """Credentials or session token missing, wrong or expired."""


class AuthorizationError(QuadError):
    """Caller is known but may not do this (not the author, not verified)."""


class ExternalServiceError(QuadError):
    """
    Infrastructure failure in a backing service.

    `service` names the dependency ("supabase", "smtp") and is copied into
    `details` for logs; the API does not expose it.
    """

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
