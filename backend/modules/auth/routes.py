"""
Authentication API endpoints.

Signup, login and the email verification flow. Business errors raised by
the service are rendered by the application-level QuadError handler.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service

from .interfaces import IAuthService
from .models import (
    AuthResult,
    LoginRequest,
    ResendResult,
    ResendVerificationRequest,
    SignupRequest,
    SignupResult,
    VerifyEmailRequest,
)

router = APIRouter()


@router.post("/signup", response_model=SignupResult, status_code=201)
async def signup(
    request: SignupRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignupResult:
    """
    Create an account with a university email.

    Returns every validation problem at once (400), or 409 when the
    email is already registered.
    """
    return await service.signup(request)


@router.post("/login", response_model=AuthResult)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """Sign in with email and password."""
    return await service.login(request.email, request.password)


@router.post("/verify-email", response_model=AuthResult)
async def verify_email(
    request: VerifyEmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """
    Consume the token from a verification link.

    On success the account is verified, college data is looked up and a
    session token is returned.
    """
    return await service.verify_email(request.token)


@router.post("/resend-verification", response_model=ResendResult)
async def resend_verification(
    request: ResendVerificationRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ResendResult:
    """Send a fresh verification link. The previous link stops working."""
    return await service.resend_verification(request.email)
