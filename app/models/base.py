"""SQLAlchemy declarative Base shared by all ORM models and Alembic."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata is the migration target."""

    pass
