"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel

from madarik_identity.app.services.session_issuer import SessionCredential
from madarik_identity.app.use_cases.users.dtos import UserInfo


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for user login use case"""

    session: SessionCredential
    user: UserInfo


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str


class ResendVerificationResponse(BaseModel):
    """Response for resend verification email use case"""

    status: str
    message: str
    email_sent: bool = False
