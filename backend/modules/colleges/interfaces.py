"""
Colleges module interface.
"""

from typing import Protocol, runtime_checkable

from .models import EmailClassification


@runtime_checkable
class IEmailClassifier(Protocol):
    """
    Interface for email classification.

    Implementations must be pure: no network calls and no mutable state,
    so the same input always yields the same result.
    """

    def classify(self, email: str) -> EmailClassification:
        """
        Classify an email address.

        Args:
            email: Candidate email address

        Returns:
            EmailClassification tagged invalid-format,
            valid-but-not-educational or valid-and-educational
        """
        ...

    def is_valid_format(self, email: str) -> bool:
        """Check only the local@domain.tld shape."""
        ...
