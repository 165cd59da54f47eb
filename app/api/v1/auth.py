"""Cookie-based auth endpoints: sign-up, sign-in, sign-out, and the current-user dependency."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.core.cookies import clear_token_cookie, get_token_cookie, set_token_cookie
from app.core.database import get_db
from app.core.security import VerificationError, sign_token, verify_token
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    CurrentUserResponse,
    ErrorResponse,
    MessageResponse,
    SignInRequest,
    SignUpRequest,
    UserPublic,
)
from app.services.auth import authenticate_user, create_user
from app.services.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _issue_session(response: Response, user: UserPublic) -> None:
    token = sign_token({"id": user.id, "email": user.email, "role": user.role})
    set_token_cookie(response, token)


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
)
def sign_up(
    body: SignUpRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Register a user, set the `token` session cookie, and return the sanitized user.

    Validation errors return 400 with per-field details; a taken email returns 409.
    """
    try:
        user = create_user(
            db,
            name=body.name,
            email=body.email,
            password=body.password,
            role=body.role,
        )
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already exists",
        ) from e

    # The account is already committed here. If signing fails the client gets a 500
    # and a retry with the same email gets 409; the user can sign in instead.
    _issue_session(response, user)
    return AuthResponse(message="User registered", user=user)


@router.post(
    "/sign-in",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
def sign_in(
    body: SignInRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Check email and password, then set the `token` session cookie."""
    try:
        user = authenticate_user(db, email=body.email, password=body.password)
    except (UserNotFoundError, InvalidCredentialsError) as e:
        # Same answer for unknown email and wrong password.
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from e

    _issue_session(response, user)
    return AuthResponse(message="User signed in", user=user)


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(response: Response) -> MessageResponse:
    """Clear the session cookie. The token itself stays valid until it expires."""
    clear_token_cookie(response)
    return MessageResponse(message="User signed out")


def get_current_user(request: Request) -> CurrentUser:
    """Dependency: require a valid `token` cookie and return its identity. Raises 401 otherwise."""
    token = get_token_cookie(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        claims = verify_token(token)
        return CurrentUser(id=claims["id"], email=claims["email"], role=claims["role"])
    except (VerificationError, KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from e


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUserResponse:
    return CurrentUserResponse(user=current_user)
