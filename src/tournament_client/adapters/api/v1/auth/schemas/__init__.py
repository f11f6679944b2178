from __future__ import annotations

"""Re-export request and response models for authentication endpoints."""

# flake8: noqa: F401 – re-export

from .requests import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyEmailRequest,
)
from .responses import ApiResponse, AuthPayload, UserOut

__all__ = [
    "ApiResponse",
    "AuthPayload",
    "ChangePasswordRequest",
    "ForgotPasswordRequest",
    "LoginRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "UserOut",
    "VerifyEmailRequest",
]
