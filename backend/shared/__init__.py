"""
Shared infrastructure for Turnstile backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Log handler setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    TurnstileError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "TurnstileError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ExternalServiceError",
    "AuthenticatedUser",
]
