"""Session cookie helpers: one place for the cookie name and its flags."""

from fastapi import Request, Response

from app.core.config import settings
from app.core.security import TOKEN_EXPIRES_IN

TOKEN_COOKIE_NAME = "token"


def _cookie_options() -> dict[str, object]:
    return {
        "httponly": True,
        "secure": settings.APP_ENV == "prod",
        "samesite": "strict",
        "path": "/",
    }


def set_token_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only cookie living as long as the token."""
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=int(TOKEN_EXPIRES_IN.total_seconds()),
        **_cookie_options(),
    )


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(TOKEN_COOKIE_NAME, **_cookie_options())


def get_token_cookie(request: Request) -> str | None:
    return request.cookies.get(TOKEN_COOKIE_NAME)
