"""
Accounts module interface.

The auth workflow depends on IAccountStore, not on a concrete store.
This enables testing with the in-memory store and swapping storage
technologies without touching the workflow.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Account, AccountUpdate, NewAccount


@runtime_checkable
class IAccountStore(Protocol):
    """
    Interface for account persistence.

    All operations must be safe under concurrent invocation. Lookups
    return None for a missing account; only `update` of an unknown id
    raises.
    """

    def create(self, account: NewAccount) -> Account:
        """
        Persist a new account and assign its id.

        Raises:
            DuplicateEmailError: If the normalized email already exists.
                Must be enforced atomically by the store, not by a
                separate existence check.
        """
        ...

    def find_by_identifier(self, value: str) -> Optional[Account]:
        """
        Legacy lookup by email or case-insensitive full name.

        Ambiguous when two accounts share a display name; kept for
        username-style lookups only. Login uses find_by_email.
        """
        ...

    def find_by_email(self, email: str) -> Optional[Account]:
        """Lookup by normalized email."""
        ...

    def find_by_id(self, account_id: str) -> Optional[Account]:
        """Lookup by account id."""
        ...

    def find_by_token(self, token: str) -> Optional[Account]:
        """Lookup by exact verification token. Expiry is not checked here."""
        ...

    def update(self, account_id: str, changes: AccountUpdate) -> Account:
        """
        Merge explicitly set fields into the account.

        Raises:
            AccountNotFoundError: If no account has this id
        """
        ...

    def exists_by_email(self, email: str) -> bool:
        """Check whether the normalized email is taken."""
        ...

    def list_all(self) -> list[Account]:
        """Return all accounts, newest first."""
        ...

    def delete_all(self) -> int:
        """
        Remove every account in one atomic step.

        Returns:
            Number of accounts removed
        """
        ...
