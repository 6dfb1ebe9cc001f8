"""
Account repository for database access.

Encapsulates all Supabase queries and row mapping for the users table.
Username uniqueness is enforced by a unique index in the database;
this layer only translates the violation into a domain error.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from shared.exceptions import ExternalServiceError
from shared.repository import BaseRepository
from .exceptions import UserAlreadyExistsError
from .models import Account

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"


class UserRepository(BaseRepository[Account]):
    """
    Repository for account data access.

    All methods return Account models mapped from database rows.
    Plaintext passwords never reach this layer.
    """

    def __init__(self, db: Client, table: str = "users") -> None:
        super().__init__(db)
        self._table = table

    def find_by_id(self, user_id: str) -> Optional[Account]:
        """
        Get an account by ID.

        IDs that are not valid UUIDs resolve to None, the same as
        IDs that are well-formed but unknown.
        """
        query = self._db.table(self._table).select("*").eq("id", user_id).limit(1)
        try:
            result = query.execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise self._wrap(e)
        except httpx.HTTPError as e:
            raise self._wrap(e)

        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    def find_by_username(self, username: str, limit: int = 1) -> list[Account]:
        """Get up to ``limit`` accounts whose username matches exactly."""
        query = (
            self._db.table(self._table)
            .select("*")
            .eq("username", username)
            .limit(limit)
        )
        try:
            result = query.execute()
        except (APIError, httpx.HTTPError) as e:
            raise self._wrap(e)
        return [self._map_to_account(row) for row in result.data]

    def insert(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account row.

        Args:
            data: Column values (username, first_name, last_name, password_hash)

        Returns:
            The created Account with its generated ID and timestamps.

        Raises:
            UserAlreadyExistsError: If the username is already taken.
        """
        try:
            result = self._db.table(self._table).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UserAlreadyExistsError(data.get("username", "")) from e
            raise self._wrap(e)
        except httpx.HTTPError as e:
            raise self._wrap(e)
        return self._map_to_account(result.data[0])

    def save(self, user_id: str, changes: dict[str, Any]) -> Optional[Account]:
        """
        Write changed columns to an existing account.

        Returns:
            The updated Account, or None if no row has this ID.

        Raises:
            UserAlreadyExistsError: If a changed username is already taken.
        """
        data = {**changes, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            result = self._db.table(self._table).update(data).eq("id", user_id).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UserAlreadyExistsError(changes.get("username", "")) from e
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise self._wrap(e)
        except httpx.HTTPError as e:
            raise self._wrap(e)

        if not result.data:
            return None
        return self._map_to_account(result.data[0])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _wrap(self, error: Exception) -> ExternalServiceError:
        """Translate a PostgREST or transport failure into ExternalServiceError."""
        if isinstance(error, APIError):
            wrapped = ExternalServiceError(
                error.message or "Database request failed",
                service="supabase",
                details={"code": error.code},
            )
        else:
            # Connection refused, timeouts and other httpx failures
            wrapped = ExternalServiceError(
                "Database unavailable",
                service="supabase",
                details={"transport": type(error).__name__},
            )
        logger.warning("Supabase request on %s failed: %s", self._table, wrapped.to_dict())
        return wrapped

    def _map_to_account(self, data: dict[str, Any]) -> Account:
        """Map a database row to an Account model."""
        return Account(
            id=str(data["id"]),
            username=data["username"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            password_hash=data["password_hash"],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
