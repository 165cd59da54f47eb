"""Tests for app.services.auth and app.services.users against an in-memory database."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError

from app.core.security import ComparisonError, HashingError, compare_password
from app.models import User
from app.services.auth import authenticate_user, create_user
from app.services.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserCreationError,
    UserNotFoundError,
)
from app.services.users import find_user_by_email, insert_user
from support import DatabaseTestCase

SANITIZED_FIELDS = {"id", "name", "email", "role", "created_at"}


class TestInsertUser(DatabaseTestCase):
    """insert_user persists a row and returns only non-secret columns."""

    def test_returns_sanitized_view(self) -> None:
        user = insert_user(
            self.db,
            name="Ada",
            email="ada@acme.io",
            hashed_password="$2b$10$notarealhashbutlongenough",
            role="user",
        )
        self.assertEqual(set(user.model_dump()), SANITIZED_FIELDS)
        self.assertIsNotNone(user.id)
        self.assertIsNotNone(user.created_at)

    def test_unique_conflict_becomes_duplicate_email_error(self) -> None:
        kwargs = {"name": "Ada", "email": "ada@acme.io", "hashed_password": "h", "role": "user"}
        insert_user(self.db, **kwargs)
        with self.assertRaises(DuplicateEmailError):
            insert_user(self.db, **{**kwargs, "name": "Ada Again"})
        self.assertEqual(self.count_users("ada@acme.io"), 1)

    def test_other_integrity_errors_propagate(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("not null"))
        session.query.return_value.filter.return_value.limit.return_value.first.return_value = None
        with self.assertRaises(IntegrityError):
            insert_user(session, name="Ada", email="ada@acme.io", hashed_password="h", role="user")
        session.rollback.assert_called_once()


class TestFindUserByEmail(DatabaseTestCase):
    def test_missing_returns_none(self) -> None:
        self.assertIsNone(find_user_by_email(self.db, "nobody@acme.io"))

    def test_exact_match(self) -> None:
        create_user(self.db, name="Ada", email="ada@acme.io", password="secret1")
        found = find_user_by_email(self.db, "ada@acme.io")
        self.assertIsNotNone(found)
        self.assertEqual(found.name, "Ada")


class TestCreateUser(DatabaseTestCase):
    """create_user: existence check, hash, insert, sanitized result."""

    def test_creates_user_with_hashed_password(self) -> None:
        user = create_user(self.db, name="Ada", email="ada@acme.io", password="secret1")
        self.assertEqual(user.email, "ada@acme.io")
        self.assertEqual(set(user.model_dump()), SANITIZED_FIELDS)
        row = self.db.query(User).filter(User.id == user.id).one()
        self.assertNotEqual(row.password, "secret1")
        self.assertTrue(compare_password("secret1", row.password))

    def test_role_defaults_to_user(self) -> None:
        user = create_user(self.db, name="Ada", email="ada@acme.io", password="secret1")
        self.assertEqual(user.role, "user")

    def test_explicit_role_is_kept(self) -> None:
        user = create_user(
            self.db, name="Root", email="root@acme.io", password="secret1", role="admin"
        )
        self.assertEqual(user.role, "admin")

    def test_duplicate_email_is_rejected_before_hashing(self) -> None:
        create_user(self.db, name="Ada", email="ada@acme.io", password="secret1")
        with patch("app.services.auth.hash_password") as mock_hash:
            with self.assertRaises(DuplicateEmailError) as ctx:
                create_user(self.db, name="Imposter", email="ada@acme.io", password="secret2")
        mock_hash.assert_not_called()
        self.assertEqual(ctx.exception.code, "DUPLICATE_EMAIL")
        self.assertEqual(self.count_users(), 1)

    def test_racing_signup_loses_on_unique_constraint(self) -> None:
        """Both requests pass the existence check; the storage constraint decides."""
        create_user(self.db, name="First", email="race@acme.io", password="secret1")
        with patch("app.services.auth.find_user_by_email", return_value=None):
            with self.assertRaises(DuplicateEmailError):
                create_user(self.db, name="Second", email="race@acme.io", password="secret2")
        self.assertEqual(self.count_users("race@acme.io"), 1)

    def test_hashing_failure_is_wrapped(self) -> None:
        with patch("app.services.auth.hash_password", side_effect=HashingError()):
            with self.assertLogs("app.services.auth", level="ERROR"):
                with self.assertRaises(UserCreationError) as ctx:
                    create_user(self.db, name="Ada", email="ada@acme.io", password="secret1")
        self.assertIsInstance(ctx.exception.__cause__, HashingError)
        self.assertEqual(ctx.exception.code, "USER_CREATION_FAILED")
        self.assertEqual(self.count_users(), 0)

    def test_storage_failure_is_wrapped(self) -> None:
        session = MagicMock()
        session.query.side_effect = RuntimeError("connection reset")
        with self.assertLogs("app.services.auth", level="ERROR"):
            with self.assertRaises(UserCreationError) as ctx:
                create_user(session, name="Ada", email="ada@acme.io", password="secret1")
        self.assertNotIn("connection reset", ctx.exception.message)


class TestAuthenticateUser(DatabaseTestCase):
    """authenticate_user: lookup, compare, sanitized result; errors re-raised as is."""

    def setUp(self) -> None:
        super().setUp()
        self.created = create_user(self.db, name="Ada", email="ada@acme.io", password="secret1")

    def test_valid_credentials(self) -> None:
        user = authenticate_user(self.db, email="ada@acme.io", password="secret1")
        self.assertEqual(user.id, self.created.id)
        self.assertEqual(set(user.model_dump()), SANITIZED_FIELDS)

    def test_unknown_email(self) -> None:
        with self.assertLogs("app.services.auth", level="WARNING") as logs:
            with self.assertRaises(UserNotFoundError):
                authenticate_user(self.db, email="ghost@acme.io", password="secret1")
        self.assertEqual([r.levelname for r in logs.records], ["WARNING"])

    def test_wrong_password(self) -> None:
        with self.assertLogs("app.services.auth", level="WARNING") as logs:
            with self.assertRaises(InvalidCredentialsError):
                authenticate_user(self.db, email="ada@acme.io", password="wrong-one")
        self.assertEqual([r.levelname for r in logs.records], ["WARNING"])

    def test_comparison_failure_is_not_wrapped(self) -> None:
        self.db.query(User).update({User.password: "corrupted"})
        self.db.commit()
        with self.assertLogs("app.services.auth", level="ERROR"):
            with self.assertRaises(ComparisonError):
                authenticate_user(self.db, email="ada@acme.io", password="secret1")


if __name__ == "__main__":
    unittest.main()
