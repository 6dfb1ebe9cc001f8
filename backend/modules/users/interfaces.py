"""
Users module interfaces.

Other modules and the API layer depend on IUserService; the service
depends on IUserRepository. Tests swap either one for an in-memory fake.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    Account,
    AuthorizeRequest,
    ChangePasswordRequest,
    CreateUserRequest,
    ExistingUserResult,
    UpdateProfileRequest,
    UpdateUserResult,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Persistence contract for accounts.

    The store enforces username uniqueness; implementations translate a
    uniqueness violation into UserAlreadyExistsError.
    """

    def find_by_id(self, user_id: str) -> Optional[Account]:
        """Return the account with this ID, or None."""
        ...

    def find_by_username(self, username: str, limit: int = 1) -> list[Account]:
        """Return up to ``limit`` accounts whose username matches exactly."""
        ...

    def insert(self, data: dict[str, Any]) -> Account:
        """
        Insert a new account row.

        Raises:
            UserAlreadyExistsError: If the username is taken
        """
        ...

    def save(self, user_id: str, changes: dict[str, Any]) -> Optional[Account]:
        """
        Write ``changes`` to an existing account.

        Returns:
            The updated account, or None if no account has this ID

        Raises:
            UserAlreadyExistsError: If a new username is taken
        """
        ...


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for account operations.

    This protocol defines the contract that the users module exposes
    to the API layer.
    """

    async def find_by_user_id(self, user_id: str) -> Account:
        """
        Load an account by ID.

        Raises:
            AccountNotFoundError: If the ID does not resolve
        """
        ...

    async def create(self, request: CreateUserRequest) -> Account:
        """
        Register a new account.

        Raises:
            UserAlreadyExistsError: If the username is taken
        """
        ...

    async def verify(self, request: AuthorizeRequest) -> Account:
        """
        Confirm a username/password pair.

        Raises:
            UnknownUsernameError: If no account has the username
            IncorrectPasswordError: If the password does not match
        """
        ...

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> UpdateUserResult:
        """
        Overwrite username, first and last name.

        Writes only when at least one value actually changed.

        Raises:
            AccountNotFoundError: If the ID does not resolve
            UserAlreadyExistsError: If the new username is taken
        """
        ...

    async def check_if_exists(self, username: str) -> ExistingUserResult:
        """Report whether any account has this username."""
        ...

    async def change_password(
        self,
        user_id: str,
        request: ChangePasswordRequest,
    ) -> UpdateUserResult:
        """
        Replace the password after re-checking the current one.

        Raises:
            AccountNotFoundError: If the ID does not resolve
            IncorrectPasswordError: If the current password does not match
        """
        ...
