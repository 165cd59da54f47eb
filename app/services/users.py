"""User persistence: lookup by email and insert returning the sanitized view."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.schemas.auth import UserPublic
from app.services.exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)


def find_user_by_email(session: Session, email: str) -> User | None:
    """Exact-match lookup; at most one row thanks to the unique index on email."""
    return session.query(User).filter(User.email == email).limit(1).first()


def insert_user(
    session: Session,
    *,
    name: str,
    email: str,
    hashed_password: str,
    role: str,
) -> UserPublic:
    """
    Insert a user and commit. Returns id, name, email, role, created_at only.

    A unique-constraint conflict on email (another request won the race after
    our existence check) is reported as DuplicateEmailError.
    """
    user = User(name=name, email=email, password=hashed_password, role=role)
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        if find_user_by_email(session, email) is not None:
            logger.warning("Insert rejected by unique email constraint")
            raise DuplicateEmailError()
        raise
    session.refresh(user)
    return UserPublic.model_validate(user)
