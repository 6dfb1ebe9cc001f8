"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, TurnstileError


class InvalidTokenError(AuthenticationError):
    """Raised when an access token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when an access token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no access token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class AuthConfigurationError(TurnstileError):
    """Raised when tokens cannot be signed or checked because JWT_SECRET is unset."""

    def __init__(self, message: str = "Server authentication not configured"):
        super().__init__(message, code="AUTH_NOT_CONFIGURED")
