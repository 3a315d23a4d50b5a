"""SQLAlchemy ORM models."""

from rollcall.models.base import Base
from rollcall.models.role import Role, users_roles
from rollcall.models.user import User

__all__ = ["Base", "Role", "User", "users_roles"]
