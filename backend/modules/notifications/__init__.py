"""
Notifications module.

Delivers account emails (verification links, enrichment summaries).

Public API:
- INotificationDispatcher: Interface consumed by the auth workflow
- SmtpNotificationDispatcher: Delivery over SMTP
- LoggingNotificationDispatcher: Development fallback that logs links
- NotificationDispatchError: Raised by dispatchers that cannot deliver
"""

from .interfaces import INotificationDispatcher
from .email import LoggingNotificationDispatcher, SmtpNotificationDispatcher
from .exceptions import NotificationDispatchError

__all__ = [
    "INotificationDispatcher",
    "LoggingNotificationDispatcher",
    "SmtpNotificationDispatcher",
    "NotificationDispatchError",
]
