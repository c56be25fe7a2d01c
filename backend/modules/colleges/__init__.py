"""
Colleges module.

Classifies email addresses as belonging (or not) to an educational
institution, using a curated domain table plus suffix heuristics.

Public API:
- IEmailClassifier: Interface for classification
- CollegeEmailClassifier: Default implementation
- EmailClassification, ClassificationStatus, CollegeInfo: Result models
"""

from .interfaces import IEmailClassifier
from .classifier import CollegeEmailClassifier, get_email_classifier
from .models import (
    ClassificationStatus,
    CollegeInfo,
    EmailClassification,
    InstitutionType,
)

__all__ = [
    # Interface
    "IEmailClassifier",
    # Implementation
    "CollegeEmailClassifier",
    "get_email_classifier",
    # Models
    "ClassificationStatus",
    "CollegeInfo",
    "EmailClassification",
    "InstitutionType",
]
