"""
Authentication module.

Issues and validates access tokens and serves the /auth endpoints
(register, login, username availability).

Public API:
- IAuthService: Interface for token operations
- AuthTokenResult: Token handed to clients
- TokenPayload: Decoded token claims
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import AuthTokenResult, TokenPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthConfigurationError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthTokenResult",
    "TokenPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthConfigurationError",
]
