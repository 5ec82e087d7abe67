from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from libs.result import Error
from madarik_identity.api.error import ClientError, ServerError
from madarik_identity.api.utils.auth_guard import require_user
from madarik_identity.api.utils.rate_limit import LoginThrottle
from madarik_identity.app.services.authorization_guard import AuthenticatedUser
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    LoginResponse,
    RequestPasswordResetResponse,
    ResendVerificationResponse,
    VerifyEmailResponse,
)
from madarik_identity.depends import get_clock, get_identity_service, get_login_throttle

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Email is not validated here: a malformed address is reported as
    INVALID_CREDENTIALS like any other unknown account.
    """

    email: str = Field(..., max_length=255, description="User email address")
    password: str = Field(..., max_length=1024, description="User password")


TOO_MANY_ATTEMPTS = Error(
    "TOO_MANY_ATTEMPTS", "Too many login attempts, please try again later"
)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    service: IdentityService = Depends(get_identity_service),
    throttle: LoginThrottle = Depends(get_login_throttle),
    clock: IClock = Depends(get_clock),
):
    """
    User Login

    Authenticates user and returns a signed session credential.
    Every attempt counts toward the per-address, per-email limit.

    Raises:
        - 401 Unauthorized: Unknown email, wrong password or inactive account
        - 429 Too Many Requests: TOO_MANY_ATTEMPTS, with Retry-After
        - 500 Internal Server Error: Server error
    """
    client_host = http_request.client.host if http_request.client else None
    key = LoginThrottle.key(client_host, request.email)
    now = clock.now()

    if not throttle.hit(key, now):
        raise ClientError(
            TOO_MANY_ATTEMPTS,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(throttle.retry_after(key, now))},
        )

    result = await service.login(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=255, description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """
    Request Password Reset

    Emails a reset link if the account exists and is active.

    Security:
        - No email enumeration (same response for every email)

    Returns:
        - 200 OK: Always returns success
    """
    result = await service.forgot_password(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Password reset token")
    new_password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: INVALID_TOKEN, INVALID_PASSWORD
        - 409 Conflict: TOKEN_ALREADY_USED
        - 410 Gone: TOKEN_EXPIRED
        - 500 Internal Server Error: Server error
    """
    result = await service.reset_password(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TOKEN_ALREADY_USED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "TOKEN_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Email verification token")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(
    request: VerifyEmailRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """
    Email Verification

    Raises:
        - 400 Bad Request: Invalid token
        - 409 Conflict: Token already used
        - 410 Gone: Expired token
        - 500 Internal Server Error: Server error
    """
    result = await service.verify_email(request.token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TOKEN_ALREADY_USED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "TOKEN_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
)
async def resend_verification(
    current_user: AuthenticatedUser = Depends(require_user),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Resend Verification Email

    Issues a new verification link for the signed-in user.

    Raises:
        - 401 Unauthorized: Missing or invalid session
        - 500 Internal Server Error: Server error
    """
    result = await service.resend_verification(current_user.id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
