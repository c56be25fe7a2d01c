"""
In-memory account store.

Keeps accounts in a dict guarded by a re-entrant lock. A secondary index
from normalized email to id is the uniqueness constraint: it is checked
and written inside the same critical section as the insert.
"""

import logging
import threading
import uuid
from typing import Optional

from shared.clock import Clock, utcnow

from .exceptions import AccountNotFoundError, DuplicateEmailError
from .interfaces import IAccountStore
from .models import Account, AccountUpdate, NewAccount, normalize_email

logger = logging.getLogger(__name__)


class InMemoryAccountStore(IAccountStore):
    """Account store for development and tests. Data is lost on restart."""

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._accounts: dict[str, Account] = {}
        self._ids_by_email: dict[str, str] = {}

    def create(self, account: NewAccount) -> Account:
        key = normalize_email(account.email)
        now = self._clock()
        with self._lock:
            if key in self._ids_by_email:
                raise DuplicateEmailError(account.email)
            record = Account(
                id=str(uuid.uuid4()),
                created_at=now,
                updated_at=now,
                **account.model_dump(),
            )
            self._accounts[record.id] = record
            self._ids_by_email[key] = record.id
        logger.debug(f"Stored account {record.id}")
        return record.model_copy(deep=True)

    def find_by_identifier(self, value: str) -> Optional[Account]:
        with self._lock:
            for account in self._accounts.values():
                if account.email == value or account.full_name.lower() == value.lower():
                    return account.model_copy(deep=True)
        return None

    def find_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            account_id = self._ids_by_email.get(normalize_email(email))
            if account_id is None:
                return None
            return self._accounts[account_id].model_copy(deep=True)

    def find_by_id(self, account_id: str) -> Optional[Account]:
        with self._lock:
            account = self._accounts.get(account_id)
            return account.model_copy(deep=True) if account else None

    def find_by_token(self, token: str) -> Optional[Account]:
        if not token:
            return None
        with self._lock:
            for account in self._accounts.values():
                if account.verification_token == token:
                    return account.model_copy(deep=True)
        return None

    def update(self, account_id: str, changes: AccountUpdate) -> Account:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                raise AccountNotFoundError(account_id)
            updated = current.model_copy(
                update={**changes.changes(), "updated_at": self._clock()},
                deep=True,
            )
            self._accounts[account_id] = updated
            return updated.model_copy(deep=True)

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return normalize_email(email) in self._ids_by_email

    def list_all(self) -> list[Account]:
        with self._lock:
            accounts = [a.model_copy(deep=True) for a in self._accounts.values()]
        return sorted(accounts, key=lambda a: a.created_at, reverse=True)

    def delete_all(self) -> int:
        with self._lock:
            removed = len(self._accounts)
            self._accounts = {}
            self._ids_by_email = {}
        logger.info(f"Cleared {removed} accounts from memory store")
        return removed
