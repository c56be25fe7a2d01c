"""
Simulated college data provider.

Stands in for integrations with university student-information systems.
Each known institution has its own department and course catalogue;
everything else falls back to a generic catalogue.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from shared.clock import Clock, utcnow
from modules.accounts.models import EnrichmentData
from .interfaces import IEnrichmentProvider
from .models import EnrichmentContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstitutionCatalog:
    """Departments and courses offered by one institution, keyed by program."""

    departments: dict[str, str]
    courses: dict[str, list[str]]
    default_department: str
    default_courses: list[str] = field(default_factory=list)


HARVARD = InstitutionCatalog(
    departments={
        "computer science": "Computer Science",
        "engineering": "Engineering and Applied Sciences",
        "business": "Harvard Business School",
        "medicine": "Harvard Medical School",
        "law": "Harvard Law School",
    },
    courses={
        "computer science": ["CS50", "CS51", "CS61", "CS124", "CS171"],
        "engineering": ["ES50", "AM10", "ES51", "CS50", "MATH21"],
        "business": ["BUSI101", "ACCT501", "FINA601", "MKTG501", "OPER601"],
        "medicine": ["MED101", "ANAT201", "PHYS301", "PATH401", "CLIN501"],
        "law": ["LAW101", "CONS201", "TORTS301", "CORP401", "CRIM501"],
    },
    default_department="General Studies",
    default_courses=["GEN101", "GEN201", "GEN301"],
)

MIT = InstitutionCatalog(
    departments={
        "computer science": "Electrical Engineering and Computer Science",
        "engineering": "Mechanical Engineering",
        "physics": "Physics",
        "mathematics": "Mathematics",
        "chemistry": "Chemistry",
    },
    courses={
        "computer science": ["6.001", "6.002", "6.034", "6.046", "6.006"],
        "engineering": ["2.001", "2.003", "2.005", "2.007", "2.009"],
        "physics": ["8.01", "8.02", "8.03", "8.04", "8.05"],
        "mathematics": ["18.01", "18.02", "18.03", "18.06", "18.700"],
        "chemistry": ["5.111", "5.112", "5.13", "5.60", "5.61"],
    },
    default_department="General Institute Requirements",
    default_courses=["GIR.01", "GIR.02", "GIR.03"],
)

STANFORD = InstitutionCatalog(
    departments={
        "computer science": "Computer Science",
        "engineering": "Engineering",
        "business": "Graduate School of Business",
        "medicine": "School of Medicine",
        "education": "Graduate School of Education",
    },
    courses={
        "computer science": ["CS106A", "CS106B", "CS107", "CS110", "CS161"],
        "engineering": ["ENGR40M", "ENGR76", "CS106A", "MATH51", "PHYS41"],
        "business": ["OB374", "ACCT341", "FIN560", "MKTG365", "OIT262"],
        "medicine": ["MED201", "ANES201", "DERM240", "EMED324", "NEUR260"],
        "education": ["EDUC115", "EDUC200", "EDUC301", "EDUC402", "EDUC503"],
    },
    default_department="Undergraduate Education",
    default_courses=["PWR1", "THINK", "WAYS"],
)

CATALOGS_BY_DOMAIN: dict[str, InstitutionCatalog] = {
    "harvard.edu": HARVARD,
    "student.harvard.edu": HARVARD,
    "mit.edu": MIT,
    "student.mit.edu": MIT,
    "stanford.edu": STANFORD,
    "student.stanford.edu": STANFORD,
}

GENERIC_COURSES = [
    "ENG101", "MATH101", "SCI101", "HIST101", "ART101",
    "ENG201", "MATH201", "SCI201", "HIST201", "ART201",
    "ENG301", "MATH301", "SCI301", "HIST301", "ART301",
]

ADVISOR_FIRST_NAMES = ["Dr. Sarah", "Prof. Michael", "Dr. Emily", "Prof. David", "Dr. Jennifer", "Prof. Robert"]
ADVISOR_LAST_NAMES = ["Johnson", "Williams", "Brown", "Davis", "Miller", "Wilson", "Moore", "Taylor"]


def parse_year_of_study(value: Optional[str]) -> int:
    """Year of study as a positive int; anything unparseable counts as year 1."""
    try:
        year = int((value or "").strip())
    except ValueError:
        return 1
    return max(year, 1)


def current_semester(month: int) -> str:
    if 1 <= month <= 5:
        return "Spring"
    if 6 <= month <= 8:
        return "Summer"
    return "Fall"


class CollegeDataProvider(IEnrichmentProvider):
    """
    Simulated enrichment provider.

    Advisor and GPA are drawn from `rng`; pass a seeded random.Random for
    reproducible output.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Clock = utcnow,
        latency: float = 0.0,
    ):
        self._rng = rng or random.Random()
        self._clock = clock
        self._latency = latency

    async def fetch(self, context: EnrichmentContext) -> Optional[EnrichmentData]:
        if not context.domain:
            logger.warning("Cannot enrich account without an email domain")
            return None

        if self._latency:
            await asyncio.sleep(self._latency)

        year = parse_year_of_study(context.year_of_study)
        program_key = (context.program or "").strip().lower()
        catalog = CATALOGS_BY_DOMAIN.get(context.domain)

        if catalog is not None:
            department = catalog.departments.get(program_key, catalog.default_department)
            courses = catalog.courses.get(program_key, catalog.default_courses)
            courses = courses[: min(year + 2, len(courses))]
        else:
            department = (context.program or "").strip() or "General Studies"
            courses = GENERIC_COURSES[: min(year * 2 + 1, len(GENERIC_COURSES))]

        now = self._clock()
        data = EnrichmentData(
            department=department,
            courses=list(courses),
            academic_year=f"{now.year}-{now.year + 1}",
            semester=current_semester(now.month),
            advisor=f"{self._rng.choice(ADVISOR_FIRST_NAMES)} {self._rng.choice(ADVISOR_LAST_NAMES)}",
            gpa=round(self._rng.uniform(2.5, 4.0), 2),
        )
        logger.debug(f"Enriched account data for domain {context.domain}: {data.department}")
        return data
