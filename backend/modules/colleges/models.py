"""
College classification data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InstitutionType(str, Enum):
    """Kind of educational institution."""

    UNIVERSITY = "university"
    COLLEGE = "college"
    INSTITUTE = "institute"


class ClassificationStatus(str, Enum):
    """Outcome of classifying an email address."""

    INVALID_FORMAT = "invalid-format"
    NOT_EDUCATIONAL = "valid-but-not-educational"
    EDUCATIONAL = "valid-and-educational"


class CollegeInfo(BaseModel):
    """
    Institution metadata attached to an educational email domain.

    `verified` distinguishes curated institutions from ones matched only
    by a suffix heuristic.
    """

    model_config = {"frozen": True}

    name: str
    domain: str
    country: str
    type: InstitutionType = InstitutionType.UNIVERSITY
    verified: bool = False


class EmailClassification(BaseModel):
    """Tagged classification result for a candidate email address."""

    model_config = {"frozen": True}

    status: ClassificationStatus
    domain: str = ""
    college: Optional[CollegeInfo] = None
    suggestions: list[str] = Field(default_factory=list)
    message: Optional[str] = None

    @property
    def is_valid_format(self) -> bool:
        return self.status != ClassificationStatus.INVALID_FORMAT

    @property
    def is_educational(self) -> bool:
        return self.status == ClassificationStatus.EDUCATIONAL
