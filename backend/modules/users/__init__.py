"""
Users module.

Owns the account record: registration, credential verification,
profile updates, password changes and username lookups.

Public API:
- IUserService: Interface for account operations
- IUserRepository: Interface for account persistence
- Account: The persisted account record
- Request/result models for each operation
- Users exceptions: AccountNotFoundError, UserAlreadyExistsError, etc.
"""

from .interfaces import IUserService, IUserRepository
from .models import (
    Account,
    AccountProfile,
    CreateUserRequest,
    AuthorizeRequest,
    UpdateProfileRequest,
    ChangePasswordRequest,
    ExistingUserResult,
    UpdateUserResult,
)
from .exceptions import (
    AccountNotFoundError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    UnknownUsernameError,
    IncorrectPasswordError,
    PasswordTooLongError,
)

__all__ = [
    # Interfaces
    "IUserService",
    "IUserRepository",
    # Models
    "Account",
    "AccountProfile",
    "CreateUserRequest",
    "AuthorizeRequest",
    "UpdateProfileRequest",
    "ChangePasswordRequest",
    "ExistingUserResult",
    "UpdateUserResult",
    # Exceptions
    "AccountNotFoundError",
    "UserAlreadyExistsError",
    "InvalidCredentialsError",
    "UnknownUsernameError",
    "IncorrectPasswordError",
    "PasswordTooLongError",
]
