"""
Accounts module.

Persistence of user accounts. The store is the single source of truth
for identity and verification state, and owns the email uniqueness
constraint.

Public API:
- IAccountStore: Interface for account persistence
- InMemoryAccountStore, SupabaseAccountStore: Implementations
- Account, NewAccount, AccountUpdate, EnrichmentData: Models
- Account exceptions: DuplicateEmailError, AccountNotFoundError
"""

from .interfaces import IAccountStore
from .models import (
    Account,
    AccountProfile,
    AccountUpdate,
    EnrichmentData,
    NewAccount,
    normalize_email,
)
from .exceptions import DuplicateEmailError, AccountNotFoundError
from .memory_store import InMemoryAccountStore
from .repository import SupabaseAccountStore

__all__ = [
    # Interface
    "IAccountStore",
    # Implementations
    "InMemoryAccountStore",
    "SupabaseAccountStore",
    # Models
    "Account",
    "AccountProfile",
    "AccountUpdate",
    "EnrichmentData",
    "NewAccount",
    "normalize_email",
    # Exceptions
    "DuplicateEmailError",
    "AccountNotFoundError",
]
