from datetime import timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.email_gateway_sender import (
    DisabledNotificationSender,
    EmailGatewaySender,
)
from src.adapter.services.jwt_token_signer import JwtTokenSigner
from src.adapter.services.oidc_identity_verifier import OidcUserInfoVerifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import raise_for_error
from src.app.errors import unauthorized_error
from src.app.services.identity_verifier import ExternalIdentityVerifier
from src.app.services.notification_sender import NotificationSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_code_manager import ResetCodeManager
from src.app.services.token_service import TokenClaims, TokenService
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ValidateTokenUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_signer() -> TokenSigner:
    return JwtTokenSigner(ApplicationConfig.JWT_SECRET, ApplicationConfig.JWT_ALGORITHM)


def get_notification_sender() -> NotificationSender:
    if ApplicationConfig.DISABLE_EMAILS:
        return DisabledNotificationSender()
    return EmailGatewaySender(
        gateway_url=ApplicationConfig.EMAIL_GATEWAY_URL,
        api_key=ApplicationConfig.EMAIL_GATEWAY_API_KEY,
        hmac_secret=ApplicationConfig.EMAIL_GATEWAY_HMAC_SECRET,
        frontend_url=ApplicationConfig.FRONTEND_URL,
    )


def get_identity_verifier() -> ExternalIdentityVerifier:
    return OidcUserInfoVerifier(ApplicationConfig.OIDC_USERINFO_URL)


def get_token_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenService:
    return TokenService(
        uow,
        signer,
        access_ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
        refresh_ttl=timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS),
        reset_ttl=timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES),
    )


def get_reset_code_manager(
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
    notifier: NotificationSender = Depends(get_notification_sender),
) -> ResetCodeManager:
    return ResetCodeManager(
        uow,
        tokens,
        notifier,
        code_ttl=timedelta(minutes=ApplicationConfig.RESET_CODE_TTL_MINUTES),
    )


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """Raw bearer token from the Authorization header; 401 if missing"""
    if credentials is None or not credentials.credentials:
        raise_for_error(unauthorized_error("Missing bearer token"))
    return credentials.credentials


async def get_current_claims(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Dependency resolving the bearer token to validated claims.

    Returns:
        TokenClaims for the caller, passed explicitly to each use case

    Raises:
        ClientError: 401 if token is invalid, expired or revoked
    """
    result = await ValidateTokenUseCase(uow, tokens).execute(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
