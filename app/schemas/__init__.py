"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    CurrentUserResponse,
    ErrorResponse,
    MessageResponse,
    SignInRequest,
    SignUpRequest,
    UserPublic,
    ValidationErrorDetail,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "CurrentUserResponse",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "SignInRequest",
    "SignUpRequest",
    "UserPublic",
    "ValidationErrorDetail",
]
