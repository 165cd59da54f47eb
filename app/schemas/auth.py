"""Request/response schemas for auth endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

NAME_MIN_LEN = 2
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

Role = Literal["user", "admin"]


def _normalize_email(value: object) -> object:
    # Emails are compared case-insensitively: store and look up the lower-cased form.
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SignUpRequest(BaseModel):
    """Registration payload."""

    name: str = Field(
        ..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name"
    )
    email: EmailStr = Field(..., description="Unique email")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: Role = Field(default="user", description="Account role")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v)


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v)


class UserPublic(BaseModel):
    """Sanitized user: every column except the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Response for sign-up and sign-in; the token itself travels in the cookie."""

    message: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


class CurrentUser(BaseModel):
    """Identity carried by a verified session token."""

    id: int
    email: str
    role: str


class CurrentUserResponse(BaseModel):
    user: CurrentUser


class ValidationErrorDetail(BaseModel):
    """One failing field in a 400 validation response."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: list[ValidationErrorDetail] | None = None
