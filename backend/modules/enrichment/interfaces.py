"""
Enrichment module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.accounts.models import EnrichmentData
from .models import EnrichmentContext


@runtime_checkable
class IEnrichmentProvider(Protocol):
    """Interface for institution data lookups."""

    async def fetch(self, context: EnrichmentContext) -> Optional[EnrichmentData]:
        """
        Look up academic data for an account.

        Args:
            context: Account attributes to route the lookup on

        Returns:
            EnrichmentData, or None when nothing is available. None is a
            valid outcome and simply leaves the account unenriched.
        """
        ...
