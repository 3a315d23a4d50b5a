"""Tests for the create_user command-line script."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from rollcall.core.database import SessionLocal, engine
from rollcall.core.security import verify_password
from rollcall.models import Base, User
from rollcall.scripts.create_user import main


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        self.out = io.StringIO()
        self.err = io.StringIO()

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=engine)

    def run_main(self, *argv: str) -> int:
        with redirect_stdout(self.out), redirect_stderr(self.err):
            return main(list(argv))

    def stored(self, username: str) -> User | None:
        db = SessionLocal()
        try:
            user = db.query(User).filter(User.username == username).first()
            if user is not None:
                _ = user.role_names, user.password_hash
            return user
        finally:
            db.close()

    def test_without_roles_uses_default_role(self) -> None:
        self.assertEqual(self.run_main("carol", "carol-password"), 0)
        carol = self.stored("carol")
        self.assertEqual(carol.role_names, ["ROLE_USER"])
        self.assertTrue(verify_password("carol-password", carol.password_hash))
        self.assertIn("Created user 'carol' with roles ROLE_USER.", self.out.getvalue())

    def test_requested_roles_are_assigned(self) -> None:
        self.assertEqual(self.run_main("dave", "dave-password", "ROLE_ADMIN", "ROLE_USER"), 0)
        self.assertEqual(self.stored("dave").role_names, ["ROLE_ADMIN", "ROLE_USER"])

    def test_unknown_role_name_fails(self) -> None:
        self.assertEqual(self.run_main("erin", "erin-password", "ROLE_NOPE"), 1)
        self.assertIn("Unknown role 'ROLE_NOPE'.", self.err.getvalue())
        self.assertIsNone(self.stored("erin"))

    def test_duplicate_username_fails(self) -> None:
        self.assertEqual(self.run_main("carol", "carol-password"), 0)
        self.assertEqual(self.run_main("carol", "other-password", "ROLE_ADMIN"), 1)
        self.assertIn("A user with that name already exists", self.err.getvalue())
        self.assertEqual(self.stored("carol").role_names, ["ROLE_USER"])

    def test_short_password_fails(self) -> None:
        self.assertEqual(self.run_main("frank", "short"), 1)
        self.assertIn("password:", self.err.getvalue())
        self.assertIsNone(self.stored("frank"))


if __name__ == "__main__":
    unittest.main()
