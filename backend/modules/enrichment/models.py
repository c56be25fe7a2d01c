"""
Enrichment module data models.
"""

from typing import Optional

from pydantic import BaseModel

from modules.accounts.models import Account


class EnrichmentContext(BaseModel):
    """Account attributes an enrichment provider may route on."""

    model_config = {"frozen": True}

    email: str
    full_name: str
    university_name: Optional[str] = None
    university_id: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "EnrichmentContext":
        return cls(
            email=account.email,
            full_name=account.full_name,
            university_name=account.university_name,
            university_id=account.university_id,
            program=account.program,
            year_of_study=account.year_of_study,
        )

    @property
    def domain(self) -> str:
        return self.email.rsplit("@", 1)[-1].lower() if "@" in self.email else ""
