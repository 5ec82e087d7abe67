"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    LoginResponse,
    VerifyEmailResponse,
    ResendVerificationResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Responses
    "LoginResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
]
