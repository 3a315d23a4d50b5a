"""Test environment: in-memory SQLite and a fixed JWT secret, set before rollcall is imported."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("INITIAL_ADMIN_USERNAME", None)
os.environ.pop("INITIAL_ADMIN_PASSWORD", None)

import rollcall.core.security as security  # noqa: E402

# Fast hashes for tests; production keeps the module default.
security.BCRYPT_ROUNDS = 4
