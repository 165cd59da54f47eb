"""Password hashing and JWT session token signing/verification."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds) applied to every new password hash.
BCRYPT_ROUNDS = 10
# bcrypt only uses the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Session tokens have a fixed absolute lifetime; there is no refresh.
TOKEN_EXPIRES_IN = timedelta(days=1)


class HashingError(Exception):
    """Raised when the hashing primitive fails; carries only a generic message."""

    def __init__(self, message: str = "Password hashing failed") -> None:
        self.message = message
        super().__init__(message)


class ComparisonError(Exception):
    """Raised when a password cannot be compared (e.g. malformed stored hash)."""

    def __init__(self, message: str = "Password comparison failed") -> None:
        self.message = message
        super().__init__(message)


class SigningError(Exception):
    """Raised when a session token cannot be signed."""

    def __init__(self, message: str = "Failed to sign token") -> None:
        self.message = message
        super().__init__(message)


class VerificationError(Exception):
    """Raised when a session token is malformed, tampered with, or expired."""

    def __init__(self, message: str = "Failed to verify token") -> None:
        self.message = message
        super().__init__(message)


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Each call uses a fresh salt."""
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")
    except (AttributeError, TypeError, ValueError) as e:
        logger.exception("Password hashing failed")
        raise HashingError() from e


def compare_password(plain_password: str, hashed: str) -> bool:
    """
    Check a plain password against a stored hash.

    Returns False on mismatch. Raises ComparisonError only when the check itself
    cannot run (e.g. the stored hash is not a bcrypt hash).
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (AttributeError, TypeError, ValueError) as e:
        logger.exception("Password comparison failed")
        raise ComparisonError() from e


def sign_token(claims: dict[str, Any]) -> str:
    """Sign claims into a JWT that expires TOKEN_EXPIRES_IN after issuance."""
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        **claims,
        "iat": now,
        "exp": now + TOKEN_EXPIRES_IN,
    }
    try:
        return jwt.encode(
            payload,
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
    except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
        logger.exception("Failed to sign token")
        raise SigningError() from e


def verify_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT; return its claims (id, email, role, iat, exp).
    Raises VerificationError on bad signature, expiry, or malformed input.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.PyJWTError as e:
        logger.warning("Failed to verify token: %s", type(e).__name__)
        raise VerificationError() from e
