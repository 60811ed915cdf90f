from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.app.services.identity_verifier import ExternalIdentityVerifier
from src.app.services.notification_sender import NotificationSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_code_manager import ResetCodeManager
from src.app.services.token_service import TokenClaims, TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.accounts import (
    AccountInfo,
    AvailabilityResponse,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    CreateAccountCommand,
    CreateAccountUseCase,
    DeleteAccountUseCase,
    UpdateAccountCommand,
    UpdateAccountUseCase,
    ValidateEmailUseCase,
    VerifyAlreadyInUseUseCase,
)
from src.app.use_cases.auth import (
    ExternalLoginResponse,
    ExternalLoginUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    RenewTokenResponse,
    RenewTokenUseCase,
    RequestResetCodeResponse,
    RequestResetCodeUseCase,
    VerifyResetCodeResponse,
    VerifyResetCodeUseCase,
)
from src.depends import (
    get_bearer_token,
    get_current_claims,
    get_identity_verifier,
    get_notification_sender,
    get_password_hasher,
    get_reset_code_manager,
    get_token_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/account", tags=["Account"])


class CreateAccountRequest(BaseModel):
    """
    Create account HTTP request payload

    Format checks here only reject obviously broken input; the use case
    applies the full username and password policy.
    """

    email: EmailStr = Field(..., description="Account email address")
    username: str = Field(..., min_length=1, max_length=255, description="Unique username")
    password: str = Field(..., min_length=1, description="Password")


@router.post(
    "/create-account", status_code=status.HTTP_201_CREATED, response_model=AccountInfo
)
async def create_account(
    request: CreateAccountRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    notifier: NotificationSender = Depends(get_notification_sender),
):
    """
    Create Account

    Registers an unconfirmed account and sends the confirmation email.

    Raises:
        - 400 Bad Request: Invalid username or weak password
        - 409 Conflict: Email or username already in use
        - 422 Unprocessable Entity: Malformed body (handled by FastAPI)
    """
    command = CreateAccountCommand(
        email=request.email, username=request.username, password=request.password
    )

    use_case = CreateAccountUseCase(uow, hasher, notifier)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ExternalLoginRequest(BaseModel):
    external_token: str = Field(..., min_length=1, description="Token issued by the identity provider")


@router.post(
    "/create-account-from-external",
    status_code=status.HTTP_200_OK,
    response_model=ExternalLoginResponse,
)
async def create_account_from_external(
    request: ExternalLoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    verifier: ExternalIdentityVerifier = Depends(get_identity_verifier),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Federated Login

    Creates the account on first use and returns a session token pair.

    Raises:
        - 401 Unauthorized: External token rejected (EXTERNAL_AUTH_ERROR)
        - 409 Conflict: A concurrent sign-up claimed the email or username first
    """
    use_case = ExternalLoginUseCase(uow, verifier, tokens)
    result = await use_case.execute(request.external_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Login

    Raises:
        - 401 Unauthorized: Invalid credentials or unconfirmed email
    """
    use_case = LoginUseCase(
        uow,
        hasher,
        tokens,
        require_confirmation=ApplicationConfig.REQUIRE_EMAIL_CONFIRMATION,
    )
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/validate/{account_id}", status_code=status.HTTP_303_SEE_OTHER)
async def validate_email(account_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Email Confirmation

    Target of the link in the confirmation email. Marks the account
    confirmed (idempotent) and redirects to the frontend login page.

    Raises:
        - 404 Not Found: Unknown account
    """
    use_case = ValidateEmailUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        raise_for_error(result.error)

    return RedirectResponse(
        url=f"{ApplicationConfig.FRONTEND_URL.rstrip('/')}/auth",
        status_code=status.HTTP_303_SEE_OTHER,
    )


class VerifyAlreadyInUseRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address to check")
    username: str = Field(..., min_length=1, max_length=255, description="Username to check")


@router.post(
    "/verify-already-used",
    status_code=status.HTTP_200_OK,
    response_model=AvailabilityResponse,
)
async def verify_already_in_use(
    request: VerifyAlreadyInUseRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Uniqueness Check

    Raises:
        - 409 Conflict: error.details.fields lists the colliding fields
    """
    use_case = VerifyAlreadyInUseUseCase(uow)
    result = await use_case.execute(request.email, request.username)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SendResetCodeRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/send-code", status_code=status.HTTP_200_OK, response_model=RequestResetCodeResponse
)
async def send_reset_code(
    request: SendResetCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_codes: ResetCodeManager = Depends(get_reset_code_manager),
):
    """
    Request Password Reset Code

    Security:
        - No email enumeration (same response for valid/invalid emails)
    """
    use_case = RequestResetCodeUseCase(uow, reset_codes)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ValidateResetCodeRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")
    code: str = Field(..., min_length=1, max_length=32, description="Code from the email")


@router.post(
    "/validate-code", status_code=status.HTTP_200_OK, response_model=VerifyResetCodeResponse
)
async def validate_reset_code(
    request: ValidateResetCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_codes: ResetCodeManager = Depends(get_reset_code_manager),
):
    """
    Verify Password Reset Code

    Returns a token that only authorizes change-password.

    Raises:
        - 403 Forbidden: Invalid, expired or already used code
    """
    use_case = VerifyResetCodeUseCase(uow, reset_codes)
    result = await use_case.execute(request.email, request.code)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=1, description="New password")


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    claims: TokenClaims = Depends(get_current_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Change Password

    Accepts a session token or the token returned by /validate-code.

    Raises:
        - 400 Bad Request: Weak password
        - 401 Unauthorized: Missing, invalid, expired or revoked token
    """
    use_case = ChangePasswordUseCase(uow, hasher)
    result = await use_case.execute(claims.account_id, request.new_password, claims)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RenewTokenRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Renewal identifier")


@router.post("/renew-token", status_code=status.HTTP_200_OK, response_model=RenewTokenResponse)
async def renew_token(
    request: RenewTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Renew Token

    Rotates the renewal identifier; the old one stops working.

    Raises:
        - 401 Unauthorized: Unknown, reused, revoked or expired identifier
    """
    use_case = RenewTokenUseCase(uow, tokens)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(get_bearer_token),
    claims: TokenClaims = Depends(get_current_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Logout

    Revokes the presented token and its renewal identifier.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or revoked token
    """
    use_case = LogoutUseCase(uow, tokens)
    result = await use_case.execute(claims.account_id, token)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    claims: TokenClaims = Depends(get_current_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Account

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or revoked token
    """
    use_case = DeleteAccountUseCase(uow)
    result = await use_case.execute(claims.account_id, claims)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


class UpdateAccountRequest(BaseModel):
    email: Optional[EmailStr] = Field(None, description="New email address")
    username: Optional[str] = Field(None, min_length=1, max_length=255, description="New username")


async def _update_account(
    account_id: UUID,
    request: UpdateAccountRequest,
    claims: TokenClaims,
    uow: UnitOfWork,
    notifier: NotificationSender,
):
    command = UpdateAccountCommand(email=request.email, username=request.username)

    use_case = UpdateAccountUseCase(uow, notifier)
    result = await use_case.execute(account_id, command, claims)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/update", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def update_own_account(
    request: UpdateAccountRequest,
    claims: TokenClaims = Depends(get_current_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: NotificationSender = Depends(get_notification_sender),
):
    """
    Update Account

    Raises:
        - 400 Bad Request: Invalid fields or nothing to update
        - 401 Unauthorized: Missing, invalid, expired or revoked token
        - 409 Conflict: Email or username taken by another account
    """
    return await _update_account(claims.account_id, request, claims, uow, notifier)


@router.patch("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def update_account(
    account_id: UUID,
    request: UpdateAccountRequest,
    claims: TokenClaims = Depends(get_current_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: NotificationSender = Depends(get_notification_sender),
):
    """
    Update Any Account (application admins, or the owner)

    Raises:
        - 401 Unauthorized: Caller is neither the owner nor an admin
        - 404 Not Found: Unknown account
    """
    return await _update_account(account_id, request, claims, uow, notifier)
