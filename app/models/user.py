"""ORM model for registered users."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base

DEFAULT_ROLE = "user"


class User(Base):
    """
    User account for cookie-based JWT authentication.

    password holds the bcrypt hash, never the plain text.
    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
