"""Authentication service - application layer business logic.

This service orchestrates authentication use cases:
1. Login for moderators, organizations and users (credential check + issuance)
2. Token refresh (rotation through the session service)
3. Logout (revocation through the session service)
4. Current subject (access token verification)
5. User email and email+license lookups

It is the boundary between typed rotation results and the HTTP layer:
expected failures become ApplicationError subclasses that the
presentation layer maps to 401-class responses.
"""

import logging
from collections.abc import Callable
from typing import Union

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
from app.application.dtos.session_dto import RotationFailureReason, RotationSuccess
from app.application.exceptions.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordNotSetError,
    RefreshTokenExpiredError,
    SubjectInactiveError,
    TokenNotFoundError,
    TokenRevokedError,
)
from app.application.services.session_service import SessionService
from app.domain.entities.subject import SubjectType
from app.domain.exceptions import TokenVerificationError
from app.domain.repositories.unit_of_work import IUnitOfWork
from app.domain.services.password_hasher import IPasswordHasher
from app.domain.services.token_codec import ITokenCodec

logger = logging.getLogger(__name__)

_FAILURE_ERRORS: dict[RotationFailureReason, Callable[[], InvalidTokenError]] = {
    RotationFailureReason.INVALID_TOKEN: lambda: InvalidTokenError(
        RotationFailureReason.INVALID_TOKEN.value
    ),
    RotationFailureReason.TOKEN_NOT_FOUND: TokenNotFoundError,
    RotationFailureReason.TOKEN_REVOKED: TokenRevokedError,
    RotationFailureReason.TOKEN_EXPIRED: RefreshTokenExpiredError,
}


class AuthService:
    """
    Authentication service encapsulating auth-related use cases.

    Testing:
    - Unit tests use FakeUnitOfWork and FakePasswordHasher
    - The real JWT codec is cheap enough to use directly
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        session_service: SessionService,
        token_codec: ITokenCodec,
        password_hasher: IPasswordHasher,
        access_token_expires_in: int = 15 * 60,
    ):
        """
        Initialize auth service with dependencies.

        Args:
            uow_factory: Factory function that returns IUnitOfWork instances
            session_service: Session lifecycle manager
            token_codec: Token codec, used to read access tokens
            password_hasher: Password verification (abstraction)
            access_token_expires_in: Access token lifetime in seconds (for responses)
        """
        self._uow_factory = uow_factory
        self._session_service = session_service
        self._token_codec = token_codec
        self._password_hasher = password_hasher
        self._access_token_expires_in = access_token_expires_in

    async def login(
        self,
        subject_type: SubjectType,
        dto: Union[ModeratorLoginDTO, EmailLoginDTO],
    ) -> LoginResultDTO:
        """
        Authenticate a subject and issue a session.

        Business logic:
        1. Look the subject up by its login field
        2. Refuse inactive subjects and organizations without a password
        3. Verify the password
        4. Issue tokens carrying the subject's role claims

        Args:
            subject_type: Which kind of subject is logging in
            dto: Login credentials

        Returns:
            LoginResultDTO with the token pair and subject details

        Raises:
            InvalidCredentialsError: Unknown login or wrong password
            SubjectInactiveError: Subject is deactivated
            PasswordNotSetError: Organization has no password yet
        """
        async with self._uow_factory() as uow:
            subject = await uow.subjects.find_by_login(subject_type, dto.login)

        if subject is None:
            # Don't reveal whether the login exists
            raise InvalidCredentialsError()

        if not subject.active:
            raise SubjectInactiveError(f"{subject_type.value.capitalize()} inactive")

        if not subject.has_password:
            raise PasswordNotSetError()

        assert subject.password_hash is not None
        if not self._password_hasher.verify(dto.password, subject.password_hash):
            logger.info(f"Failed login for {subject_type.value} {subject.subject_id}")
            raise InvalidCredentialsError()

        session = await self._session_service.issue(
            subject_type=subject.subject_type,
            subject_id=subject.subject_id,
            extra_claims=subject.claim_extras(),
        )

        return LoginResultDTO(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=self._access_token_expires_in,
            refresh_expires_at=session.refresh_expires_at,
            subject_type=subject.subject_type.value,
            subject_id=subject.subject_id,
            login=subject.login,
            name=subject.name,
            organization_id=subject.organization_id,
            group_id=subject.group_id,
            license=subject.license,
        )

    async def refresh(self, dto: RefreshTokenDTO) -> TokenPairDTO:
        """
        Rotate a refresh token into a new pair.

        Args:
            dto: Refresh token request

        Returns:
            New TokenPairDTO

        Raises:
            InvalidTokenError: Or a subclass naming why rotation failed
        """
        result = await self._session_service.rotate(dto.refresh_token)

        if isinstance(result, RotationSuccess):
            return TokenPairDTO.from_session(result.session, self._access_token_expires_in)

        raise _FAILURE_ERRORS[result.reason]()

    async def logout(self, dto: RefreshTokenDTO) -> None:
        """
        Revoke a refresh token. Never fails for unknown or revoked tokens.

        Args:
            dto: Logout request carrying the refresh token
        """
        await self._session_service.revoke(dto.refresh_token)

    async def get_current_subject(self, access_token: str) -> CurrentSubjectDTO:
        """
        Read the subject behind an access token.

        Access tokens are stateless: they stay valid until their embedded
        expiry even after logout.

        Args:
            access_token: JWT access token

        Returns:
            CurrentSubjectDTO with identity and claims

        Raises:
            InvalidTokenError: If token is invalid/expired
        """
        try:
            claims = self._token_codec.verify_access(access_token)
        except TokenVerificationError:
            raise InvalidTokenError("Invalid or expired access token")

        return CurrentSubjectDTO(
            subject_type=claims.subject_type.value,
            subject_id=claims.subject_id,
            claims=claims.extras,
            expires_at=claims.expires_at,
        )

    async def verify_user_email(self, dto: VerifyEmailDTO) -> ExistsDTO:
        """
        Check whether a user is registered under an email.

        Args:
            dto: Email to look up

        Returns:
            ExistsDTO telling whether a user matched
        """
        async with self._uow_factory() as uow:
            exists = await uow.subjects.exists_by_email(dto.email)

        return ExistsDTO(exists=exists)

    async def verify_user_email_license(self, dto: VerifyEmailLicenseDTO) -> ExistsDTO:
        """Check whether a user with this email also holds this license."""
        async with self._uow_factory() as uow:
            exists = await uow.subjects.exists_by_email(dto.email, license=dto.license)

        return ExistsDTO(exists=exists)
