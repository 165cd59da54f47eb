"""Shared base class for tests that need a fresh users table."""

import unittest

from app.core.database import SessionLocal, engine
from app.models import Base, User


class DatabaseTestCase(unittest.TestCase):
    """Creates all tables on the in-memory SQLite engine before each test and drops them after."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def count_users(self, email: str | None = None) -> int:
        query = self.db.query(User)
        if email is not None:
            query = query.filter(User.email == email)
        return query.count()
