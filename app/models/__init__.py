"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import DEFAULT_ROLE, User

__all__ = ["Base", "DEFAULT_ROLE", "User"]
