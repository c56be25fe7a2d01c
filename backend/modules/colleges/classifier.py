"""
College email classifier.

Decides whether an address is well formed and whether its domain belongs to
a recognized educational institution. Classification is a pure function of
the input and the static tables in `domains.py`.
"""

import logging
import re
from typing import Optional

from .domains import (
    CONSUMER_MAIL_PROVIDERS,
    CURATED_DOMAINS,
    EDUCATIONAL_SUFFIXES,
    UNIVERSITY_EMAIL_HINT,
)
from .interfaces import IEmailClassifier
from .models import (
    ClassificationStatus,
    CollegeInfo,
    EmailClassification,
    InstitutionType,
)

logger = logging.getLogger(__name__)

# local@domain.tld with no whitespace and exactly one "@"
_EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CollegeEmailClassifier(IEmailClassifier):
    """
    Default email classifier.

    Lookup order: exact curated domain, then educational suffix, then
    not-educational (with suggestions for consumer mail providers).
    """

    def is_valid_format(self, email: str) -> bool:
        if not email:
            return False
        if not _EMAIL_SHAPE.match(email):
            return False
        domain = email.rsplit("@", 1)[1]
        # Reject empty labels such as "a@.com" or "a@b..edu"
        return all(domain.split("."))

    def classify(self, email: str) -> EmailClassification:
        email = (email or "").strip()
        if not self.is_valid_format(email):
            return EmailClassification(
                status=ClassificationStatus.INVALID_FORMAT,
                message="Invalid email format",
            )

        domain = self.extract_domain(email)

        curated = CURATED_DOMAINS.get(domain)
        if curated is not None:
            return EmailClassification(
                status=ClassificationStatus.EDUCATIONAL,
                domain=domain,
                college=curated,
            )

        college = self._match_suffix(domain)
        if college is not None:
            logger.debug(f"Domain {domain} matched educational suffix heuristically")
            return EmailClassification(
                status=ClassificationStatus.EDUCATIONAL,
                domain=domain,
                college=college,
            )

        return EmailClassification(
            status=ClassificationStatus.NOT_EDUCATIONAL,
            domain=domain,
            suggestions=self._suggestions(domain),
            message="Email domain does not appear to be from a university or college",
        )

    @staticmethod
    def extract_domain(email: str) -> str:
        """Return the lower-cased part after the last '@'."""
        if "@" not in email:
            return ""
        return email.rsplit("@", 1)[1].strip().lower()

    def _match_suffix(self, domain: str) -> Optional[CollegeInfo]:
        for suffix, country in EDUCATIONAL_SUFFIXES:
            # The suffix must be preceded by at least one whole label
            if domain.endswith(suffix) and len(domain) > len(suffix):
                institution_label = domain[: -len(suffix)].split(".")[-1]
                return CollegeInfo(
                    name=self._format_college_name(institution_label),
                    domain=domain,
                    country=country,
                    type=InstitutionType.UNIVERSITY,
                    verified=False,
                )
        return None

    @staticmethod
    def _format_college_name(label: str) -> str:
        words = [w for w in re.split(r"[-_]", label) if w]
        return " ".join(w[:1].upper() + w[1:] for w in words) + " University"

    @staticmethod
    def _suggestions(domain: str) -> list[str]:
        suggestions: list[str] = []
        if domain in CONSUMER_MAIL_PROVIDERS:
            suggestions.append(UNIVERSITY_EMAIL_HINT)
        labels = domain.split(".")
        if "edu" not in labels and "ac" not in labels:
            suggestions.append(f"Did you mean {labels[0]}.edu?")
        return suggestions


# Module-level instance getter
_classifier_instance: Optional[CollegeEmailClassifier] = None


def get_email_classifier() -> CollegeEmailClassifier:
    """Get the shared classifier (stateless, safe to share)."""
    global _classifier_instance
    if _classifier_instance is None:
        _classifier_instance = CollegeEmailClassifier()
    return _classifier_instance
