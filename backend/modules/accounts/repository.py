"""
Supabase account store.

Backed by the `accounts` table (see migrations/001_create_accounts.sql).
Email uniqueness is enforced by the unique index on `email_normalized`;
a concurrent duplicate insert surfaces as a unique violation and is
translated to DuplicateEmailError.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository
from .exceptions import AccountNotFoundError, DuplicateEmailError
from .interfaces import IAccountStore
from .models import Account, AccountUpdate, NewAccount, normalize_email

logger = logging.getLogger(__name__)

TABLE = "accounts"

# PostgREST refuses unfiltered deletes; every uuid differs from the nil uuid.
_NIL_UUID = "00000000-0000-0000-0000-000000000000"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseAccountStore(BaseRepository[Account], IAccountStore):
    """
    Account store backed by Supabase Postgres.

    Note: This store does NOT perform authorization checks.
    The auth service is responsible for that.
    """

    def create(self, account: NewAccount) -> Account:
        data = account.model_dump(mode="json")
        data["email"] = account.email.strip()
        data["email_normalized"] = normalize_email(account.email)

        result = self._execute(
            "create account",
            self._db.table(TABLE).insert(data),
            on_unique_violation=lambda: DuplicateEmailError(account.email),
        )
        return self._map_to_account(result.data[0])

    def find_by_identifier(self, value: str) -> Optional[Account]:
        result = self._execute(
            "find account by email",
            self._db.table(TABLE).select("*").eq("email", value).limit(1),
        )
        if result.data:
            return self._map_to_account(result.data[0])

        result = self._execute(
            "find account by name",
            self._db.table(TABLE).select("*").ilike("full_name", _escape_like(value)).limit(1),
        )
        if result.data:
            return self._map_to_account(result.data[0])
        return None

    def find_by_email(self, email: str) -> Optional[Account]:
        return self._find_one("email_normalized", normalize_email(email))

    def find_by_id(self, account_id: str) -> Optional[Account]:
        return self._find_one("id", account_id)

    def find_by_token(self, token: str) -> Optional[Account]:
        if not token:
            return None
        return self._find_one("verification_token", token)

    def update(self, account_id: str, changes: AccountUpdate) -> Account:
        data: dict[str, Any] = changes.model_dump(mode="json", exclude_unset=True)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = self._execute(
            "update account",
            self._db.table(TABLE).update(data).eq("id", account_id),
            on_no_data=lambda: AccountNotFoundError(account_id),
        )
        if not result.data:
            raise AccountNotFoundError(account_id)
        return self._map_to_account(result.data[0])

    def exists_by_email(self, email: str) -> bool:
        result = self._execute(
            "check email",
            self._db.table(TABLE).select("id").eq("email_normalized", normalize_email(email)).limit(1),
        )
        return bool(result.data)

    def list_all(self) -> list[Account]:
        result = self._execute(
            "list accounts",
            self._db.table(TABLE).select("*").order("created_at", desc=True),
        )
        return [self._map_to_account(row) for row in result.data]

    def delete_all(self) -> int:
        # Single DELETE statement, so Postgres applies it all-or-nothing.
        result = self._execute(
            "delete accounts",
            self._db.table(TABLE).delete().neq("id", _NIL_UUID),
        )
        removed = len(result.data or [])
        logger.info(f"Deleted {removed} accounts")
        return removed

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _find_one(self, column: str, value: str) -> Optional[Account]:
        result = self._execute(
            f"find account by {column}",
            self._db.table(TABLE).select("*").eq(column, value).limit(1),
        )
        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    def _map_to_account(self, data: dict[str, Any]) -> Account:
        """Map database row to Account model."""
        return Account(
            id=str(data["id"]),
            full_name=data["full_name"],
            email=data["email"],
            password_hash=data["password_hash"],
            is_email_verified=bool(data.get("is_email_verified", False)),
            verification_token=data.get("verification_token"),
            verification_token_expires_at=data.get("verification_token_expires_at"),
            phone_number=data.get("phone_number"),
            university_name=data.get("university_name"),
            university_id=data.get("university_id"),
            program=data.get("program"),
            year_of_study=data.get("year_of_study"),
            college=data.get("college"),
            enrichment=data.get("enrichment"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
