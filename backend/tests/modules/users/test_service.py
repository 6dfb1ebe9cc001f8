"""Tests for the users service."""

import bcrypt
import pytest
from unittest.mock import patch

from modules.users.exceptions import (
    AccountNotFoundError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    UnknownUsernameError,
    UserAlreadyExistsError,
)
from modules.users.models import (
    AuthorizeRequest,
    ChangePasswordRequest,
    CreateUserRequest,
    UpdateProfileRequest,
)
from modules.users.passwords import verify_password
from modules.users.service import UserService
from tests.fakes import InMemoryUserRepository


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def service(repository) -> UserService:
    return UserService(repository)


@pytest.fixture
def existing(repository):
    """An account for 'ada' with password 'analytical'."""
    return repository.add("ada", "analytical")


def create_request(username: str = "grace", password: str = "cobol-1959") -> CreateUserRequest:
    return CreateUserRequest(
        username=username,
        password=password,
        first_name="Grace",
        last_name="Hopper",
    )


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_account_with_hashed_password(self, service, repository):
        account = await service.create(create_request())

        assert account.username == "grace"
        assert account.first_name == "Grace"
        assert account.password_hash != "cobol-1959"
        assert verify_password("cobol-1959", repository.rows[account.id].password_hash)

    @pytest.mark.asyncio
    async def test_new_username_then_exists(self, service):
        await service.create(create_request())

        result = await service.check_if_exists("grace")
        assert result.existing is True

    @pytest.mark.asyncio
    async def test_duplicate_username_fails(self, service, repository, existing):
        before = repository.rows[existing.id].model_copy()

        with pytest.raises(UserAlreadyExistsError):
            await service.create(create_request(username="ada", password="something-else"))

        assert repository.rows[existing.id] == before
        assert len(repository.rows) == 1
        assert repository.writes == 0


class TestVerify:
    @pytest.mark.asyncio
    async def test_correct_credentials(self, service, existing):
        account = await service.verify(AuthorizeRequest(username="ada", password="analytical"))
        assert account.id == existing.id
        assert account.username == "ada"

    @pytest.mark.asyncio
    async def test_wrong_password(self, service, existing):
        with pytest.raises(IncorrectPasswordError):
            await service.verify(AuthorizeRequest(username="ada", password="wrong"))

    @pytest.mark.asyncio
    async def test_unknown_username(self, service, existing):
        with pytest.raises(UnknownUsernameError):
            await service.verify(AuthorizeRequest(username="babbage", password="analytical"))

    @pytest.mark.asyncio
    async def test_both_failures_share_a_base(self, service, existing):
        """Callers can treat unknown user and wrong password as one failure."""
        for request in (
            AuthorizeRequest(username="ada", password="wrong"),
            AuthorizeRequest(username="babbage", password="analytical"),
        ):
            with pytest.raises(InvalidCredentialsError):
                await service.verify(request)

    @pytest.mark.asyncio
    async def test_unknown_username_costs_one_bcrypt_check(self, service, existing):
        """Both failures run bcrypt once, so timing does not reveal which one happened."""
        for request in (
            AuthorizeRequest(username="ada", password="wrong"),
            AuthorizeRequest(username="babbage", password="analytical"),
        ):
            with patch.object(bcrypt, "checkpw", wraps=bcrypt.checkpw) as checkpw:
                with pytest.raises(InvalidCredentialsError):
                    await service.verify(request)
            assert checkpw.call_count == 1

    @pytest.mark.asyncio
    async def test_verify_does_not_write(self, service, repository, existing):
        await service.verify(AuthorizeRequest(username="ada", password="analytical"))
        assert repository.writes == 0


class TestFindByUserId:
    @pytest.mark.asyncio
    async def test_found(self, service, existing):
        account = await service.find_by_user_id(existing.id)
        assert account.username == "ada"

    @pytest.mark.asyncio
    async def test_missing(self, service):
        with pytest.raises(AccountNotFoundError) as exc_info:
            await service.find_by_user_id("missing")
        assert exc_info.value.message == "User does not exist."


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_identical_values_skip_write(self, service, repository, existing):
        result = await service.update_profile(
            existing.id,
            UpdateProfileRequest(username="ada", first_name="Ada", last_name="Lovelace"),
        )

        assert result.updated is False
        assert repository.writes == 0

    @pytest.mark.asyncio
    async def test_changed_value_is_saved(self, service, repository, existing):
        result = await service.update_profile(
            existing.id,
            UpdateProfileRequest(username="countess", first_name="Ada", last_name="King"),
        )

        assert result.updated is True
        assert repository.writes == 1
        stored = repository.rows[existing.id]
        assert stored.username == "countess"
        assert stored.first_name == "Ada"
        assert stored.last_name == "King"

    @pytest.mark.asyncio
    async def test_does_not_touch_password(self, service, repository, existing):
        before = repository.rows[existing.id].password_hash
        await service.update_profile(
            existing.id,
            UpdateProfileRequest(username="ada", first_name="Augusta", last_name="Lovelace"),
        )
        assert repository.rows[existing.id].password_hash == before

    @pytest.mark.asyncio
    async def test_missing_account(self, service, repository):
        with pytest.raises(AccountNotFoundError):
            await service.update_profile(
                "missing",
                UpdateProfileRequest(username="x", first_name="y", last_name="z"),
            )
        assert repository.writes == 0

    @pytest.mark.asyncio
    async def test_username_taken(self, service, repository, existing):
        repository.add("grace", "cobol-1959")

        with pytest.raises(UserAlreadyExistsError):
            await service.update_profile(
                existing.id,
                UpdateProfileRequest(username="grace", first_name="Ada", last_name="Lovelace"),
            )
        assert repository.rows[existing.id].username == "ada"


class TestCheckIfExists:
    @pytest.mark.asyncio
    async def test_existing(self, service, existing):
        result = await service.check_if_exists("ada")
        assert result.existing is True

    @pytest.mark.asyncio
    async def test_unknown_username_is_not_an_error(self, service):
        result = await service.check_if_exists("nobody")
        assert result.existing is False

    @pytest.mark.asyncio
    async def test_match_is_exact(self, service, existing):
        result = await service.check_if_exists("Ada")
        assert result.existing is False


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_wrong_current_password(self, service, repository, existing):
        before = repository.rows[existing.id].password_hash

        with pytest.raises(IncorrectPasswordError):
            await service.change_password(
                existing.id,
                ChangePasswordRequest(password="wrong", new_password="difference"),
            )

        assert repository.rows[existing.id].password_hash == before
        assert repository.writes == 0

    @pytest.mark.asyncio
    async def test_correct_current_password(self, service, repository, existing):
        before = repository.rows[existing.id].password_hash

        result = await service.change_password(
            existing.id,
            ChangePasswordRequest(password="analytical", new_password="difference"),
        )

        assert result.updated is True
        assert repository.writes == 1
        stored = repository.rows[existing.id].password_hash
        assert stored != before
        assert verify_password("difference", stored)
        assert not verify_password("analytical", stored)

    @pytest.mark.asyncio
    async def test_same_password_still_writes(self, service, repository, existing):
        """A verified password change always writes, even to the same value."""
        result = await service.change_password(
            existing.id,
            ChangePasswordRequest(password="analytical", new_password="analytical"),
        )
        assert result.updated is True
        assert repository.writes == 1

    @pytest.mark.asyncio
    async def test_new_password_works_for_login(self, service, existing):
        await service.change_password(
            existing.id,
            ChangePasswordRequest(password="analytical", new_password="difference"),
        )
        account = await service.verify(AuthorizeRequest(username="ada", password="difference"))
        assert account.id == existing.id

    @pytest.mark.asyncio
    async def test_missing_account(self, service):
        with pytest.raises(AccountNotFoundError):
            await service.change_password(
                "missing",
                ChangePasswordRequest(password="analytical", new_password="difference"),
            )
