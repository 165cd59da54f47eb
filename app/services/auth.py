"""Registration and authentication workflows on top of the user repository and hasher."""

import logging

from sqlalchemy.orm import Session

from app.core.security import compare_password, hash_password
from app.models import DEFAULT_ROLE
from app.schemas.auth import UserPublic
from app.services.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserCreationError,
    UserNotFoundError,
)
from app.services.users import find_user_by_email, insert_user

logger = logging.getLogger(__name__)


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = DEFAULT_ROLE,
) -> UserPublic:
    """
    Register a new user and return the sanitized record.

    DuplicateEmailError is re-raised as is. Any other failure (lookup, hashing,
    insert) is logged and wrapped in UserCreationError.
    """
    try:
        if find_user_by_email(session, email) is not None:
            raise DuplicateEmailError()
        hashed = hash_password(password)
        user = insert_user(
            session,
            name=name,
            email=email,
            hashed_password=hashed,
            role=role,
        )
    except DuplicateEmailError:
        logger.warning("User creation rejected: email already registered")
        raise
    except Exception as e:
        logger.exception("Error creating a user")
        raise UserCreationError() from e

    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate_user(session: Session, *, email: str, password: str) -> UserPublic:
    """
    Check credentials and return the sanitized user.
    Raises UserNotFoundError or InvalidCredentialsError; errors are not wrapped.
    """
    try:
        user = find_user_by_email(session, email)
        if user is None:
            raise UserNotFoundError()
        if not compare_password(password, user.password):
            raise InvalidCredentialsError()
    except (UserNotFoundError, InvalidCredentialsError) as e:
        logger.warning("Authentication rejected: %s", e.code)
        raise
    except Exception as e:
        logger.error("Error authenticating user: %s", type(e).__name__)
        raise

    logger.info("User authenticated", extra={"user_id": user.id})
    return UserPublic.model_validate(user)
