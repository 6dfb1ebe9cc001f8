"""
Users module data models.

Account is the stored record; the request models are the validated
bodies the routes accept, and the result models are what they return.
Wire names are camelCase (firstName, newPassword); snake_case is
accepted too.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .passwords import hash_password_async, verify_password_async

# Fields a profile update may touch. Only these take part in change detection.
TRACKED_FIELDS = ("username", "first_name", "last_name")


class Account(BaseModel):
    """
    A persisted user account.

    The password is only ever held as a bcrypt hash. Use
    compare_password() and set_password() rather than touching
    password_hash directly.
    """

    id: str = Field(..., description="Account ID assigned by the store")
    username: str = Field(..., description="Unique username")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")
    password_hash: str = Field(..., repr=False, description="bcrypt hash of the password")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def snapshot(self) -> dict[str, Any]:
        """Capture the current values of the tracked fields."""
        return {name: getattr(self, name) for name in TRACKED_FIELDS}

    def modified_fields(self, snapshot: dict[str, Any]) -> dict[str, Any]:
        """
        Return the tracked fields whose value differs from ``snapshot``.

        Assigning a field its current value does not count as a change.
        """
        return {
            name: getattr(self, name)
            for name in TRACKED_FIELDS
            if getattr(self, name) != snapshot[name]
        }

    async def compare_password(self, candidate: str) -> bool:
        """Check a plaintext password against the stored hash."""
        return await verify_password_async(candidate, self.password_hash)

    async def set_password(self, password: str) -> None:
        """Replace the stored hash with a fresh hash of ``password``."""
        self.password_hash = await hash_password_async(password)


class AccountProfile(BaseModel):
    """Public view of an account. Never includes the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @classmethod
    def from_account(cls, account: Account) -> "AccountProfile":
        return cls(
            id=account.id,
            username=account.username,
            first_name=account.first_name,
            last_name=account.last_name,
            created_at=account.created_at,
        )


class CreateUserRequest(BaseModel):
    """Body of POST /auth/new."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=6, max_length=72)
    first_name: str = Field(..., alias="firstName", max_length=128)
    last_name: str = Field(..., alias="lastName", max_length=128)


class AuthorizeRequest(BaseModel):
    """Body of POST /auth."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    """Body of PUT /users/me/profile. All three fields are overwritten."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=64)
    first_name: str = Field(..., alias="firstName", max_length=128)
    last_name: str = Field(..., alias="lastName", max_length=128)


class ChangePasswordRequest(BaseModel):
    """Body of PUT /users/me/password."""

    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., alias="newPassword", min_length=6, max_length=72)


class ExistingUserResult(BaseModel):
    """Whether a username is taken."""

    existing: bool


class UpdateUserResult(BaseModel):
    """Whether an update wrote anything to the store."""

    updated: bool
