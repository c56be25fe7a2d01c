"""
Enrichment module.

Looks up supplementary academic data for an account once its university
email has been verified.

Public API:
- IEnrichmentProvider: Interface consumed by the auth workflow
- CollegeDataProvider: Simulated per-institution lookup
- EnrichmentContext: What the provider is told about the account
"""

from .interfaces import IEnrichmentProvider
from .models import EnrichmentContext
from .provider import CollegeDataProvider

__all__ = [
    "IEnrichmentProvider",
    "EnrichmentContext",
    "CollegeDataProvider",
]
