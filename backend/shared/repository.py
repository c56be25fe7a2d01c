"""
Base repository class for database access.

Provides a common abstraction layer for Supabase-backed stores, encapsulating
client access and the translation of driver errors into Quad exceptions.
"""

from typing import Any, Callable, Optional, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ExternalServiceError, QuadError, ValidationError


T = TypeVar("T")

# Postgres SQLSTATEs translated to business errors rather than outages
UNIQUE_VIOLATION = "23505"
NO_DATA_FOUND = "P0002"
INVALID_TEXT_REPRESENTATION = "22P02"


class StorageUnavailableError(ExternalServiceError):
    """Raised when the backing store cannot complete a request."""

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(
            f"Storage unavailable during {operation}",
            service="supabase",
            code="STORAGE_UNAVAILABLE",
            details={"operation": operation, "reason": reason},
        )


class InvalidStorageInputError(ValidationError):
    """Raised when the database rejects a value's syntax, e.g. a malformed uuid."""

    def __init__(self, operation: str):
        super().__init__(
            f"Invalid identifier or value in {operation}",
            code="INVALID_INPUT",
            details={"operation": operation},
        )


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() to run a query and translate driver errors

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class PostRepository(BaseRepository[Post]):
            def get_by_id(self, post_id: str) -> Optional[Post]:
                query = self._db.table("posts").select("*").eq("id", post_id)
                result = self._execute("get post", query)
                if not result.data:
                    return None
                return self._map_to_post(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(
        self,
        operation: str,
        query: Any,
        on_unique_violation: Optional[Callable[[], QuadError]] = None,
        on_no_data: Optional[Callable[[], QuadError]] = None,
    ) -> Any:
        """
        Execute a PostgREST query builder.

        Args:
            operation: Short description used in error details.
            query: Any builder exposing execute().
            on_unique_violation: Factory for the business error to raise
                when the database reports a unique constraint violation.
            on_no_data: Factory for the business error to raise when a
                database function signals a missing row (P0002), or when
                a key is malformed (22P02) and so cannot name any row.

        Raises:
            InvalidStorageInputError: For a malformed value with no
                on_no_data factory.
            StorageUnavailableError: For any other driver or transport failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if on_unique_violation is not None and e.code == UNIQUE_VIOLATION:
                raise on_unique_violation() from e
            if on_no_data is not None and e.code in (NO_DATA_FOUND, INVALID_TEXT_REPRESENTATION):
                raise on_no_data() from e
            if e.code == INVALID_TEXT_REPRESENTATION:
                raise InvalidStorageInputError(operation) from e
            raise StorageUnavailableError(operation, reason=str(e)) from e
        except httpx.HTTPError as e:
            raise StorageUnavailableError(operation, reason=str(e)) from e
