"""
Static institution data used by the email classifier.

CURATED_DOMAINS maps an exact, lower-cased email domain to its institution.
EDUCATIONAL_SUFFIXES lists the dotted suffixes used by higher-education
institutions, longest first, together with the country they imply.
"""

from types import MappingProxyType

from .models import CollegeInfo, InstitutionType


def _college(name: str, domain: str, country: str, type: InstitutionType) -> tuple[str, CollegeInfo]:
    return domain, CollegeInfo(name=name, domain=domain, country=country, type=type, verified=True)


CURATED_DOMAINS: "MappingProxyType[str, CollegeInfo]" = MappingProxyType(dict([
    # India
    _college("Shiv Nadar University Chennai", "snuchennai.edu.in", "India", InstitutionType.UNIVERSITY),
    _college("Vellore Institute of Technology", "vit.ac.in", "India", InstitutionType.INSTITUTE),
    _college("Indian Institute of Technology Madras", "iitm.ac.in", "India", InstitutionType.INSTITUTE),
    _college("Anna University", "anna.ac.in", "India", InstitutionType.UNIVERSITY),
    _college("SRM Institute of Science and Technology", "srmist.edu.in", "India", InstitutionType.INSTITUTE),
    # USA
    _college("Harvard University", "harvard.edu", "USA", InstitutionType.UNIVERSITY),
    _college("Harvard University (Student)", "student.harvard.edu", "USA", InstitutionType.UNIVERSITY),
    _college("Massachusetts Institute of Technology", "mit.edu", "USA", InstitutionType.INSTITUTE),
    _college("MIT (Student)", "student.mit.edu", "USA", InstitutionType.INSTITUTE),
    _college("Stanford University", "stanford.edu", "USA", InstitutionType.UNIVERSITY),
]))

# Order matters: two-label suffixes must be tried before ".edu".
EDUCATIONAL_SUFFIXES: tuple[tuple[str, str], ...] = (
    (".edu.in", "India"),
    (".ac.in", "India"),
    (".edu.au", "Australia"),
    (".ac.uk", "UK"),
    (".edu.sg", "Singapore"),
    (".edu.my", "Malaysia"),
    (".edu", "USA"),
)

CONSUMER_MAIL_PROVIDERS: frozenset[str] = frozenset({
    "gmail.com",
    "googlemail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "live.com",
    "icloud.com",
    "aol.com",
    "protonmail.com",
})

UNIVERSITY_EMAIL_HINT = "Did you mean to use your university email instead?"
