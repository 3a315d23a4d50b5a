"""Settings validation."""

import unittest

from pydantic import ValidationError

from rollcall.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_sqlite_and_postgres_urls_accepted(self) -> None:
        self.assertEqual(Settings(DATABASE_URL="sqlite://").DATABASE_URL, "sqlite://")
        url = "postgresql+psycopg2://u:p@db:5432/rollcall"
        self.assertEqual(Settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_unsupported_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://u:p@db/rollcall")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(LOG_LEVEL="chatty")

    def test_seed_roles_deduplicated(self) -> None:
        s = Settings(SEED_ROLES=["ROLE_ADMIN", " ROLE_USER ", "ROLE_ADMIN", ""])
        self.assertEqual(s.SEED_ROLES, ["ROLE_ADMIN", "ROLE_USER"])
        with self.assertRaises(ValidationError):
            Settings(SEED_ROLES=[])

    def test_blank_initial_admin_is_none(self) -> None:
        self.assertIsNone(Settings(INITIAL_ADMIN_USERNAME="  ").INITIAL_ADMIN_USERNAME)

    def test_defaults(self) -> None:
        s = Settings()
        self.assertEqual(s.DEFAULT_ROLE, "ROLE_USER")
        self.assertEqual(s.ADMIN_ROLE, "ROLE_ADMIN")


if __name__ == "__main__":
    unittest.main()
