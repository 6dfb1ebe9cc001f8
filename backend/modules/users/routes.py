"""
Account API endpoints.

Read and change the profile and password of the calling account.
Requires a bearer token issued by /auth or /auth/new.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_service
from api.middleware.auth import get_current_user
from api.models.errors import ErrorResponse
from shared.exceptions import TurnstileError
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import (
    AccountProfile,
    ChangePasswordRequest,
    UpdateProfileRequest,
    UpdateUserResult,
)

router = APIRouter()

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


@router.get("/me", response_model=AccountProfile, responses=_ERROR_RESPONSES)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> AccountProfile:
    """
    Get the calling account's profile.
    """
    try:
        account = await service.find_by_user_id(user.id)
    except TurnstileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return AccountProfile.from_account(account)


@router.put("/me/profile", response_model=UpdateUserResult, responses=_ERROR_RESPONSES)
async def update_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UpdateUserResult:
    """
    Overwrite username, first and last name.

    ``updated`` is false when every value was already current.
    """
    try:
        return await service.update_profile(user.id, request)
    except TurnstileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.put("/me/password", response_model=UpdateUserResult, responses=_ERROR_RESPONSES)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UpdateUserResult:
    """
    Change the password after confirming the current one.
    """
    try:
        return await service.change_password(user.id, request)
    except TurnstileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
