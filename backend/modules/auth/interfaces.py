"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.users.models import Account

from .models import AuthTokenResult


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def create_token(self, account: Account) -> AuthTokenResult:
        """
        Issue an access token for an account.

        Args:
            account: The account the token identifies

        Returns:
            AuthTokenResult with the signed token and its lifetime

        Raises:
            AuthConfigurationError: If no signing secret is configured
        """
        ...

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate an access token and return the caller it identifies.

        Args:
            token: Bearer token from the Authorization header

        Returns:
            AuthenticatedUser with the account ID and username

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
