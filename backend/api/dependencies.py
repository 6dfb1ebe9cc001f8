"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.users.interfaces import IUserRepository, IUserService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None
        self._user_repository: "IUserRepository | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the account repository instance."""
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.config import get_settings
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(
                get_supabase_client(),
                table=get_settings().users_table,
            )
        return self._user_repository

    @property
    def users(self) -> "IUserService":
        """Get the users service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(repository=self.user_repository)
        return self._user_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._user_service = None
        self._user_repository = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    """FastAPI dependency for users service."""
    return get_container().users
