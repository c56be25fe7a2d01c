"""
Notifications module exceptions.
"""

from shared.exceptions import ExternalServiceError


class NotificationDispatchError(ExternalServiceError):
    """
    Raised when a notification cannot be handed to the delivery channel.

    The auth workflow treats this exactly like a dispatcher returning
    False; it is never shown to API callers.
    """

    def __init__(self, address: str, reason: str = ""):
        super().__init__(
            f"Could not deliver notification to {address}",
            service="email",
            code="NOTIFICATION_DISPATCH_FAILED",
            details={"reason": reason},
        )
