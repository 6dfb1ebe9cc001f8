"""
Authentication API endpoints.

Register, log in, and check whether a username is taken. Every domain
error becomes a 400 carrying only the error message.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_auth_service, get_user_service
from api.models.errors import ErrorResponse
from shared.exceptions import TurnstileError
from modules.users.exceptions import InvalidCredentialsError
from modules.users.interfaces import IUserService
from modules.users.models import (
    AuthorizeRequest,
    CreateUserRequest,
    ExistingUserResult,
)

from .interfaces import IAuthService
from .models import AuthTokenResult

router = APIRouter()

# Shown for both unknown usernames and wrong passwords
LOGIN_FAILED_MESSAGE = "Invalid username or password."

_ERROR_RESPONSES = {400: {"model": ErrorResponse}}


@router.post(
    "/new",
    response_model=AuthTokenResult,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def register(
    request: CreateUserRequest,
    users: IUserService = Depends(get_user_service),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthTokenResult:
    """
    Create a new account and issue it an access token.
    """
    try:
        account = await users.create(request)
        return await auth.create_token(account)
    except TurnstileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post(
    "",
    response_model=AuthTokenResult,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
)
async def authorize(
    request: AuthorizeRequest,
    users: IUserService = Depends(get_user_service),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthTokenResult:
    """
    Verify a username and password and issue an access token.

    Unknown usernames and wrong passwords get the same response.
    """
    try:
        account = await users.verify(request)
        return await auth.create_token(account)
    except InvalidCredentialsError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=LOGIN_FAILED_MESSAGE)
    except TurnstileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post(
    "/exists",
    response_model=ExistingUserResult,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
)
async def check_if_exists(
    username: str = Query(..., min_length=1, description="Username to look up"),
    users: IUserService = Depends(get_user_service),
) -> ExistingUserResult:
    """
    Check whether an account exists for a username.
    """
    try:
        return await users.check_if_exists(username)
    except TurnstileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
