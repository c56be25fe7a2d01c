"""
Notifications module interface.
"""

from typing import Protocol, runtime_checkable

from modules.accounts.models import EnrichmentData


@runtime_checkable
class INotificationDispatcher(Protocol):
    """
    Interface for outbound account notifications.

    Failure is expected: implementations return False (or raise
    NotificationDispatchError) and the caller decides how to degrade.
    """

    async def send(self, address: str, token: str) -> bool:
        """
        Deliver a verification link.

        Args:
            address: Recipient email address
            token: Verification token to embed in the link

        Returns:
            True if the message was accepted for delivery
        """
        ...

    async def send_enrichment_summary(
        self,
        address: str,
        full_name: str,
        data: EnrichmentData,
    ) -> bool:
        """Tell the account holder which academic data was attached."""
        ...
