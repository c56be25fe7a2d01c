"""
Time source shared by services that reason about expiry.

Services take a `Clock` so tests can pin "now" instead of patching datetime.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
