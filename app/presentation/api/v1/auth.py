"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from app.application.dtos.auth_dto import (
    CurrentSubjectDTO,
    EmailLoginDTO,
    ExistsDTO,
    LoginResultDTO,
    ModeratorLoginDTO,
    RefreshTokenDTO,
    TokenPairDTO,
    VerifyEmailDTO,
    VerifyEmailLicenseDTO,
)
from app.application.services.auth_service import AuthService
from app.domain.entities.subject import SubjectType
from app.presentation.dependencies import get_auth_service, get_current_subject
from app.presentation.error_schemas import ErrorResponse


router = APIRouter(prefix="/auth", tags=["authentication"])

_UNAUTHORIZED = {status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}}
_LOGIN_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
}


@router.post(
    "/moderator/login",
    response_model=LoginResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Moderator login",
    description="Authenticate a moderator with user name and password.",
    responses=_LOGIN_ERRORS,
)
async def moderator_login(
    dto: ModeratorLoginDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate a moderator and receive a token pair."""
    return await auth_service.login(SubjectType.MODERATOR, dto)


@router.post(
    "/organization/login",
    response_model=LoginResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Organization login",
    description="Authenticate an organization with email and password.",
    responses=_LOGIN_ERRORS,
)
async def organization_login(
    dto: EmailLoginDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate an organization and receive a token pair.

    Raises:
        400 Bad Request: Organization has no password set
        403 Forbidden: Organization inactive
    """
    return await auth_service.login(SubjectType.ORGANIZATION, dto)


@router.post(
    "/user/login",
    response_model=LoginResultDTO,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate a user with email and password.",
    responses=_LOGIN_ERRORS,
)
async def user_login(
    dto: EmailLoginDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate a user and receive a token pair.

    Both tokens carry the user's role, organization, group and license.
    """
    return await auth_service.login(SubjectType.USER, dto)


@router.post(
    "/user/verify-email",
    response_model=ExistsDTO,
    status_code=status.HTTP_200_OK,
    summary="Check user email",
    description="Report whether a user is registered under the email.",
)
async def verify_user_email(
    dto: VerifyEmailDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Look a user up by email."""
    return await auth_service.verify_user_email(dto)


@router.post(
    "/user/verify-email-license",
    response_model=ExistsDTO,
    status_code=status.HTTP_200_OK,
    summary="Check user email and license",
    description="Report whether a user with the email holds the license.",
)
async def verify_user_email_license(
    dto: VerifyEmailLicenseDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Look a user up by email and license."""
    return await auth_service.verify_user_email_license(dto)


@router.post(
    "/refresh",
    response_model=TokenPairDTO,
    status_code=status.HTTP_200_OK,
    summary="Rotate refresh token",
    description="Exchange a refresh token for a new access/refresh pair. "
    "The presented refresh token stops working.",
    responses=_UNAUTHORIZED,
)
async def refresh_token(
    dto: RefreshTokenDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Get a new token pair using a refresh token.

    Raises:
        401 Unauthorized: Invalid, unknown, revoked or expired refresh token
    """
    return await auth_service.refresh(dto)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Revoke a refresh token. Succeeds for unknown or already revoked tokens.",
)
async def logout(
    dto: RefreshTokenDTO,
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    """Revoke the refresh token. Access tokens stay valid until they expire."""
    await auth_service.logout(dto)


@router.get(
    "/me",
    response_model=CurrentSubjectDTO,
    status_code=status.HTTP_200_OK,
    summary="Get current subject",
    description="Identity and claims of the bearer of the access token.",
    responses=_UNAUTHORIZED,
)
async def get_me(
    current_subject: CurrentSubjectDTO = Depends(get_current_subject),
):
    """
    Get the currently authenticated subject.

    Requires: Authorization: Bearer <access_token>
    """
    return current_subject
