"""
User-related endpoints.

Provides endpoints for the current user's profile and college data.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.accounts.models import AccountProfile, EnrichmentData
from modules.auth.interfaces import IAuthService
from modules.auth.models import ProfileUpdateRequest
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


class CollegeDataResponse(BaseModel):
    """College data response model."""

    message: str
    college_data: Optional[EnrichmentData] = None


@router.get("/me", response_model=AccountProfile)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> AccountProfile:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return await service.get_account(user.id)


@router.patch("/me", response_model=AccountProfile)
async def update_current_user_profile(
    request: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> AccountProfile:
    """
    Update the current user's profile.

    Only fields present in the body are changed. Email and password
    cannot be changed here.
    """
    return await service.update_profile(user.id, request)


@router.get("/me/college-data", response_model=CollegeDataResponse)
async def get_current_user_college_data(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> CollegeDataResponse:
    """
    Get the academic data attached after email verification.

    Returns 403 until the email address is verified.
    """
    data = await service.get_college_data(user.id)
    return CollegeDataResponse(
        message="College data retrieved successfully" if data else "No college data available yet",
        college_data=data,
    )
