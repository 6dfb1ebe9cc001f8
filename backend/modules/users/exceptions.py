"""
Users module exceptions.

Messages are what the HTTP layer shows to callers, so they stay short
and never carry the submitted password.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class AccountNotFoundError(NotFoundError):
    """Raised when an account ID does not resolve to a stored account."""

    def __init__(self, user_id: str):
        super().__init__(
            "User does not exist.",
            code="USER_DOES_NOT_EXIST",
            details={"user_id": user_id},
        )


class UserAlreadyExistsError(ConflictError):
    """Raised when a username is already taken by another account."""

    def __init__(self, username: str):
        super().__init__(
            "User already exists.",
            code="USER_ALREADY_EXISTS",
            details={"username": username},
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Base for credential failures.

    Login collapses every subclass into one response so callers cannot
    tell an unknown username from a wrong password.
    """

    def __init__(
        self,
        message: str = "Invalid username or password.",
        code: str = "INVALID_CREDENTIALS",
        details: Optional[dict] = None,
    ):
        super().__init__(message, code=code, details=details)


class UnknownUsernameError(InvalidCredentialsError):
    """Raised when no account matches the username given at login."""

    def __init__(self, username: str):
        super().__init__(
            "User not found.",
            code="USER_NOT_FOUND",
            details={"username": username},
        )


class IncorrectPasswordError(InvalidCredentialsError):
    """Raised when a password does not match the stored hash."""

    def __init__(self):
        super().__init__("Incorrect password.", code="INCORRECT_PASSWORD")


class PasswordTooLongError(ValidationError):
    """Raised when a password exceeds what bcrypt can hash."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Password must be at most {max_bytes} bytes.",
            code="PASSWORD_TOO_LONG",
            details={"max_bytes": max_bytes},
        )
