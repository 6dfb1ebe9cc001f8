"""
Users service implementation.

Every operation follows the same shape: look the account up through the
repository, check or apply what the request asks for, and write back
only when something has to change.
"""

import logging

from .exceptions import (
    AccountNotFoundError,
    IncorrectPasswordError,
    UnknownUsernameError,
)
from .interfaces import IUserRepository, IUserService
from .models import (
    Account,
    AuthorizeRequest,
    ChangePasswordRequest,
    CreateUserRequest,
    ExistingUserResult,
    UpdateProfileRequest,
    UpdateUserResult,
)
from .passwords import hash_password_async, verify_dummy_password_async

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """
    Account service backed by an IUserRepository.

    Implements IUserService. Repository calls are synchronous; bcrypt
    work is awaited on a worker thread.
    """

    def __init__(self, repository: IUserRepository):
        self._repository = repository

    async def find_by_user_id(self, user_id: str) -> Account:
        account = self._repository.find_by_id(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account

    async def create(self, request: CreateUserRequest) -> Account:
        password_hash = await hash_password_async(request.password)
        account = self._repository.insert({
            "username": request.username,
            "first_name": request.first_name,
            "last_name": request.last_name,
            "password_hash": password_hash,
        })
        logger.info("Registered user %s (%s)", account.username, account.id)
        return account

    async def verify(self, request: AuthorizeRequest) -> Account:
        matches = self._repository.find_by_username(request.username, limit=1)
        if not matches:
            await verify_dummy_password_async(request.password)
            logger.info("Login rejected: no account for username %r", request.username)
            raise UnknownUsernameError(request.username)

        account = matches[0]
        if not await account.compare_password(request.password):
            logger.info("Login rejected: wrong password for %s", account.id)
            raise IncorrectPasswordError()

        return account

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> UpdateUserResult:
        account = await self.find_by_user_id(user_id)

        before = account.snapshot()
        account.username = request.username
        account.first_name = request.first_name
        account.last_name = request.last_name

        changes = account.modified_fields(before)
        if not changes:
            return UpdateUserResult(updated=False)

        if self._repository.save(account.id, changes) is None:
            raise AccountNotFoundError(user_id)

        logger.info("Updated profile of %s: %s", account.id, ", ".join(sorted(changes)))
        return UpdateUserResult(updated=True)

    async def check_if_exists(self, username: str) -> ExistingUserResult:
        matches = self._repository.find_by_username(username, limit=1)
        return ExistingUserResult(existing=len(matches) > 0)

    async def change_password(
        self,
        user_id: str,
        request: ChangePasswordRequest,
    ) -> UpdateUserResult:
        account = await self.find_by_user_id(user_id)

        if not await account.compare_password(request.password):
            logger.info("Password change rejected for %s: wrong current password", account.id)
            raise IncorrectPasswordError()

        await account.set_password(request.new_password)
        if self._repository.save(account.id, {"password_hash": account.password_hash}) is None:
            raise AccountNotFoundError(user_id)

        logger.info("Changed password of %s", account.id)
        return UpdateUserResult(updated=True)
